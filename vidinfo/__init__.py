"""Summarize a media file's audio/video streams from ffprobe output."""
from vidinfo.common.errors import (
    BitrateOverflowError,
    FFprobeError,
    ProbeParseError,
    VideoInfoError,
    VideoInfoWriteError,
)
from vidinfo.domain.entities.probe import Disposition, Format, FormatTags, ProbeResult, Stream, StreamTags
from vidinfo.domain.entities.video_info import VideoInfo
from vidinfo.services.video_info import new_video_info

__version__ = "0.1.0"

__all__ = [
    "BitrateOverflowError",
    "Disposition",
    "FFprobeError",
    "Format",
    "FormatTags",
    "ProbeParseError",
    "ProbeResult",
    "Stream",
    "StreamTags",
    "VideoInfo",
    "VideoInfoError",
    "VideoInfoWriteError",
    "new_video_info",
]
