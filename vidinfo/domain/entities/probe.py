# vidinfo/domain/entities/probe.py
from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, SerializerFunctionWrapHandler, model_serializer

from vidinfo.domain.enums.stream_kind import StreamKind


class _ProbeModel(BaseModel):
    """
    Lenient base for ffprobe JSON: unknown keys are ignored, missing keys fall
    back to zero values, and numbers are accepted where ffprobe usually prints
    strings.
    """
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)


class Disposition(_ProbeModel):
    default: int = 0
    dub: int = 0
    original: int = 0
    comment: int = 0
    lyrics: int = 0
    karaoke: int = 0
    forced: int = 0
    hearing_impaired: int = 0
    visual_impaired: int = 0
    clean_effects: int = 0
    attached_pic: int = 0
    timed_thumbnails: int = 0


class StreamTags(_ProbeModel):
    language: str = ""
    handler_name: str = ""


# Stream keys dropped from serialized output when zero/empty.
OMIT_WHEN_EMPTY = frozenset({
    "width", "height", "coded_width", "coded_height",
    "closed_captions", "has_b_frames",
    "sample_aspect_ratio", "display_aspect_ratio", "pix_fmt",
    "level", "chroma_location", "refs", "is_avc", "nal_length_size",
    "bits_per_raw_sample",
    "sample_fmt", "sample_rate", "channels", "channel_layout",
    "bits_per_sample", "max_bit_rate",
})


class Stream(_ProbeModel):
    """One track of the container as reported by `ffprobe -show_streams`."""
    index: int = 0
    codec_name: str = ""
    codec_long_name: str = ""
    profile: str = ""
    codec_type: str = ""
    codec_time_base: str = ""
    codec_tag_string: str = ""
    codec_tag: str = ""

    # ---- video ----
    width: int = 0
    height: int = 0
    # Encoders such as x264 pad frames to a multiple of the macroblock size and
    # store the crop for the decoder; coded size is the size before cropping.
    coded_width: int = 0
    coded_height: int = 0
    closed_captions: int = 0
    has_b_frames: int = 0
    sample_aspect_ratio: str = ""
    display_aspect_ratio: str = ""
    pix_fmt: str = ""
    level: int = 0
    chroma_location: str = ""
    refs: int = 0
    is_avc: str = ""
    nal_length_size: str = ""
    r_frame_rate: str = ""
    avg_frame_rate: str = ""

    # ---- timing ----
    time_base: str = ""
    start_pts: int = 0
    start_time: str = ""
    duration_ts: int = 0
    duration: str = ""
    bit_rate: str = ""
    bits_per_raw_sample: str = ""
    nb_frames: str = ""

    disposition: Disposition = Field(default_factory=Disposition)
    tags: StreamTags = Field(default_factory=StreamTags)

    # ---- audio ----
    sample_fmt: str = ""
    sample_rate: str = ""
    channels: int = 0
    channel_layout: str = ""
    bits_per_sample: int = 0
    max_bit_rate: str = ""

    @property
    def kind(self) -> StreamKind:
        return StreamKind.from_codec_type(self.codec_type)

    @property
    def pixels(self) -> int:
        return self.width * self.height

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> Dict[str, Any]:
        data = handler(self)
        return {k: v for k, v in data.items() if k not in OMIT_WHEN_EMPTY or v}


class FormatTags(_ProbeModel):
    major_brand: str = ""
    minor_version: str = ""
    compatible_brands: str = ""
    encoder: str = ""


class Format(_ProbeModel):
    filename: str = ""
    nb_streams: int = 0
    nb_programs: int = 0
    format_name: str = ""
    format_long_name: str = ""
    start_time: str = ""
    duration: str = ""
    size: str = ""
    bit_rate: str = ""
    probe_score: int = 0
    tags: FormatTags = Field(default_factory=FormatTags)


class ProbeResult(_ProbeModel):
    """
    Faithful reflection of `ffprobe -show_format -show_streams` JSON.
    Streams keep the order ffprobe printed them in.
    """
    streams: List[Stream] = Field(default_factory=list)
    format: Format = Field(default_factory=Format)
