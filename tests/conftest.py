# tests/conftest.py
from __future__ import annotations
import json
from typing import Any, Dict, List, Optional

import pytest

from vidinfo.common import settings as settings_mod
from vidinfo.domain.entities.probe import ProbeResult


@pytest.fixture(autouse=True)
def _fresh_settings():
    settings_mod.get_settings.cache_clear()
    yield
    settings_mod.get_settings.cache_clear()


def make_stream(
    codec_type: str,
    codec_name: str,
    bit_rate: Optional[str] = None,
    width: Optional[int] = None,
    height: Optional[int] = None,
    **extra: Any,
) -> Dict[str, Any]:
    s: Dict[str, Any] = {"codec_type": codec_type, "codec_name": codec_name}
    if bit_rate is not None:
        s["bit_rate"] = bit_rate
    if width is not None:
        s["width"] = width
    if height is not None:
        s["height"] = height
    s.update(extra)
    return s


def make_payload(streams: List[Dict[str, Any]], duration: str = "10.0", **fmt: Any) -> Dict[str, Any]:
    for i, s in enumerate(streams):
        s.setdefault("index", i)
    return {
        "streams": streams,
        "format": {"filename": "x", "nb_streams": len(streams), "duration": duration, **fmt},
    }


class FakeProber:
    """MediaProbePort double returning a canned payload and recording calls."""

    def __init__(self, payload: Dict[str, Any]):
        self.payload = payload
        self.calls: List[str] = []

    def probe(self, path) -> ProbeResult:
        self.calls.append(str(path))
        return ProbeResult.model_validate_json(json.dumps(self.payload))


# A trimmed copy of real `ffprobe -show_format -show_streams` output for an mp4.
FFPROBE_MP4_JSON = """
{
    "streams": [
        {
            "index": 0,
            "codec_name": "h264",
            "codec_long_name": "H.264 / AVC / MPEG-4 AVC / MPEG-4 part 10",
            "profile": "High",
            "codec_type": "video",
            "codec_tag_string": "avc1",
            "codec_tag": "0x31637661",
            "width": 1920,
            "height": 1080,
            "coded_width": 1920,
            "coded_height": 1088,
            "closed_captions": 0,
            "film_grain": 0,
            "has_b_frames": 2,
            "sample_aspect_ratio": "1:1",
            "display_aspect_ratio": "16:9",
            "pix_fmt": "yuv420p",
            "level": 40,
            "chroma_location": "left",
            "field_order": "progressive",
            "refs": 1,
            "is_avc": "true",
            "nal_length_size": "4",
            "id": "0x1",
            "r_frame_rate": "30000/1001",
            "avg_frame_rate": "30000/1001",
            "time_base": "1/30000",
            "start_pts": 0,
            "start_time": "0.000000",
            "duration_ts": 369000,
            "duration": "12.300000",
            "bit_rate": "4000000",
            "bits_per_raw_sample": "8",
            "nb_frames": "369",
            "extradata_size": 48,
            "disposition": {
                "default": 1,
                "dub": 0,
                "original": 0,
                "comment": 0,
                "lyrics": 0,
                "karaoke": 0,
                "forced": 0,
                "hearing_impaired": 0,
                "visual_impaired": 0,
                "clean_effects": 0,
                "attached_pic": 0,
                "timed_thumbnails": 0,
                "non_diegetic": 0,
                "captions": 0
            },
            "tags": {
                "language": "und",
                "handler_name": "VideoHandler",
                "vendor_id": "[0][0][0][0]"
            }
        },
        {
            "index": 1,
            "codec_name": "aac",
            "codec_long_name": "AAC (Advanced Audio Coding)",
            "profile": "LC",
            "codec_type": "audio",
            "codec_tag_string": "mp4a",
            "codec_tag": "0x6134706d",
            "sample_fmt": "fltp",
            "sample_rate": "48000",
            "channels": 2,
            "channel_layout": "stereo",
            "bits_per_sample": 0,
            "initial_padding": 0,
            "r_frame_rate": "0/0",
            "avg_frame_rate": "0/0",
            "time_base": "1/48000",
            "start_pts": 0,
            "start_time": "0.000000",
            "duration_ts": 590400,
            "duration": "12.300000",
            "bit_rate": "128000",
            "nb_frames": "578",
            "disposition": {
                "default": 1,
                "dub": 0,
                "original": 0,
                "comment": 0,
                "lyrics": 0,
                "karaoke": 0,
                "forced": 0,
                "hearing_impaired": 0,
                "visual_impaired": 0,
                "clean_effects": 0,
                "attached_pic": 0,
                "timed_thumbnails": 0
            },
            "tags": {
                "language": "eng",
                "handler_name": "SoundHandler"
            }
        }
    ],
    "format": {
        "filename": "/a/b/movie.mp4",
        "nb_streams": 2,
        "nb_programs": 0,
        "format_name": "mov,mp4,m4a,3gp,3g2,mj2",
        "format_long_name": "QuickTime / MOV",
        "start_time": "0.000000",
        "duration": "12.300000",
        "size": "6353121",
        "bit_rate": "4132030",
        "probe_score": 100,
        "tags": {
            "major_brand": "isom",
            "minor_version": "512",
            "compatible_brands": "isomiso2avc1mp41",
            "encoder": "Lavf60.16.100",
            "creation_time": "2024-01-01T00:00:00.000000Z"
        }
    }
}
"""


@pytest.fixture()
def mp4_probe_json() -> str:
    return FFPROBE_MP4_JSON


@pytest.fixture()
def build_stream():
    return make_stream


@pytest.fixture()
def build_payload():
    return make_payload


@pytest.fixture()
def fake_prober():
    return FakeProber
