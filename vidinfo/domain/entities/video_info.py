# vidinfo/domain/entities/video_info.py
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import PydanticSerializationError

from vidinfo.common.errors import VideoInfoWriteError
from vidinfo.common.logging import get_logger
from vidinfo.common.settings import get_settings
from vidinfo.domain.entities.probe import ProbeResult
from vidinfo.domain.policies.aggregation import (
    MAX_UINT64,
    calculate_duration,
    calculate_pixels,
    calculate_stream_info,
    describe,
)

logger = get_logger(__name__)

UInt64 = Annotated[int, Field(ge=0, le=MAX_UINT64)]

JSON_INDENT = 1


def base_name(path: str) -> str:
    """
    Last element of `path` with trailing separators removed.
    Returns "." for an empty path and the separator for a path made only of
    separators.
    """
    if not path:
        return "."
    seps = os.sep + (os.altsep or "")
    stripped = path.rstrip(seps)
    if not stripped:
        return os.sep
    return os.path.basename(stripped)


class VideoInfo(BaseModel):
    """
    Summary of a media file: the raw ffprobe result plus aggregates derived
    from it. Built once (see `new_video_info`) and never mutated afterwards.

    simple_description has the form
    "<video_format>@<video_bitrate>/<audio_format>@<audio_bitrate>",
    e.g. "h264@4000000/aac@128000" or "h264+av1@7800000/aac+opus@64000".
    Multiple formats of one kind are joined with '+'.
    """
    model_config = ConfigDict(frozen=True)

    probe_result: ProbeResult = Field(default_factory=ProbeResult)
    video_formats: List[str] = Field(default_factory=list)
    video_bitrates: List[UInt64] = Field(default_factory=list)
    audio_formats: List[str] = Field(default_factory=list)
    audio_bitrates: List[UInt64] = Field(default_factory=list)
    bitrate: UInt64 = 0
    duration: int = Field(0, ge=0)
    filename: str = ""
    # pixel count of the highest resolution video track
    pixels: int = Field(0, ge=0)
    basename: str = ""
    at_time: int = 0  # epoch seconds when probing started
    has_multiple_audio: bool = False
    has_multiple_video: bool = False
    simple_description: str = ""
    video_format: str = ""
    audio_format: str = ""
    video_bitrate: UInt64 = 0
    audio_bitrate: UInt64 = 0

    # ---- construction ---------------------------------------------------------
    @classmethod
    def from_probe_result(cls, probe_result: ProbeResult, filename: str | Path, at_time: int) -> "VideoInfo":
        """Derive every aggregate from an already-parsed probe result."""
        filename = os.fspath(filename)
        duration = calculate_duration(probe_result.format)
        streams = calculate_stream_info(probe_result.streams)
        pixels = calculate_pixels(probe_result.streams)
        desc = describe(
            streams.video_formats,
            streams.video_bitrates,
            streams.audio_formats,
            streams.audio_bitrates,
        )
        return cls(
            probe_result=probe_result,
            video_formats=streams.video_formats,
            video_bitrates=streams.video_bitrates,
            audio_formats=streams.audio_formats,
            audio_bitrates=streams.audio_bitrates,
            bitrate=streams.bitrate,
            duration=duration,
            filename=filename,
            pixels=pixels,
            basename=base_name(filename),
            at_time=at_time,
            has_multiple_audio=streams.has_multiple_audio,
            has_multiple_video=streams.has_multiple_video,
            simple_description=desc.simple,
            video_format=desc.video_format,
            audio_format=desc.audio_format,
            video_bitrate=desc.video_bitrate,
            audio_bitrate=desc.audio_bitrate,
        )

    # ---- serialization --------------------------------------------------------
    def to_json(self) -> str:
        return json.dumps(self.model_dump(mode="json"), indent=JSON_INDENT, ensure_ascii=False)

    def write_json_file(self, filename: str | Path, mode: Optional[int] = None) -> None:
        """
        Write the record as indented JSON, creating or truncating `filename`.
        `mode` is applied when the file is created (subject to the umask).
        Parent directories are not created.
        """
        if mode is None:
            mode = get_settings().output.file_mode
        try:
            payload = self.to_json().encode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise VideoInfoWriteError(f"Could not serialize video info: {e}", path=filename) from e

        try:
            fd = os.open(filename, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
            with os.fdopen(fd, "wb") as fh:
                fh.write(payload)
        except OSError as e:
            logger.error("Failed to write %s: %s", filename, e)
            raise VideoInfoWriteError(f"Could not write {filename}: {e}", path=filename) from e

    @classmethod
    def read_json_file(cls, filename: str | Path) -> "VideoInfo":
        return cls.model_validate_json(Path(filename).read_bytes())

