from __future__ import annotations
from enum import StrEnum


class StreamKind(StrEnum):
    video = "video"
    audio = "audio"
    other = "other"

    @classmethod
    def from_codec_type(cls, codec_type: str) -> "StreamKind":
        """Map an ffprobe codec_type to the kinds the summary cares about."""
        if codec_type == cls.video.value:
            return cls.video
        if codec_type == cls.audio.value:
            return cls.audio
        return cls.other
