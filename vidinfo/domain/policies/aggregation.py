# vidinfo/domain/policies/aggregation.py
from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from vidinfo.common.errors import BitrateOverflowError, ProbeParseError
from vidinfo.common.logging import get_logger
from vidinfo.domain.entities.probe import Format, Stream
from vidinfo.domain.enums.stream_kind import StreamKind

logger = get_logger(__name__)

# Bitrates are stored as unsigned 64-bit values but totals are capped at the
# signed maximum.
MAX_INT64 = 2**63 - 1
MAX_UINT64 = 2**64 - 1

FORMAT_SEPARATOR = "+"

_DECIMAL_DIGITS = re.compile(r"[0-9]+")
_DECIMAL_NUMBER = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


@dataclass
class StreamInfo:
    video_formats: List[str] = field(default_factory=list)
    video_bitrates: List[int] = field(default_factory=list)
    audio_formats: List[str] = field(default_factory=list)
    audio_bitrates: List[int] = field(default_factory=list)
    bitrate: int = 0

    @property
    def has_multiple_video(self) -> bool:
        return len(self.video_bitrates) > 1

    @property
    def has_multiple_audio(self) -> bool:
        return len(self.audio_bitrates) > 1


@dataclass(frozen=True)
class Description:
    video_format: str
    video_bitrate: int
    audio_format: str
    audio_bitrate: int

    @property
    def simple(self) -> str:
        return f"{self.video_format}@{self.video_bitrate}/{self.audio_format}@{self.audio_bitrate}"


def checked_sum(values: Iterable[int]) -> int:
    """
    Sum bitrates, refusing any addition that would push the total past MAX_INT64.
    """
    result = 0
    for n in values:
        if n > MAX_INT64 - result:
            logger.error("Bitrate overflow: %s + %s exceeds %s", result, n, MAX_INT64)
            raise BitrateOverflowError(
                "Overflow while summing bitrates",
                details={"total": result, "value": n, "limit": MAX_INT64},
            )
        result += n
    return result


def parse_bitrate(value: str, *, field_name: str = "bit_rate") -> int:
    """Parse an unsigned decimal 64-bit integer ("N/A", signs and blanks are rejected)."""
    if not isinstance(value, str) or not _DECIMAL_DIGITS.fullmatch(value):
        logger.error("Unparseable %s: %r", field_name, value)
        raise ProbeParseError(f"{field_name} is not an unsigned decimal integer: {value!r}",
                              field=field_name, value=value)
    n = int(value)
    if n > MAX_UINT64:
        logger.error("Out of range %s: %r", field_name, value)
        raise ProbeParseError(f"{field_name} is out of range for 64 bits: {value!r}",
                              field=field_name, value=value)
    return n


def calculate_duration(fmt: Format) -> int:
    """Container duration in whole seconds, rounded up."""
    raw = fmt.duration
    if not _DECIMAL_NUMBER.fullmatch(raw):
        logger.error("Unparseable format.duration: %r", raw)
        raise ProbeParseError(f"format.duration is not a decimal number: {raw!r}",
                              field="format.duration", value=raw)
    seconds = float(raw)
    if not math.isfinite(seconds) or math.ceil(seconds) < 0:
        logger.error("Unusable format.duration: %r", raw)
        raise ProbeParseError(f"format.duration is not a usable number of seconds: {raw!r}",
                              field="format.duration", value=raw)
    return int(math.ceil(seconds))


def calculate_stream_info(streams: Sequence[Stream]) -> StreamInfo:
    """
    Split streams into video and audio in their original order, collecting
    codec names and bitrates. Streams of any other kind are skipped.
    """
    info = StreamInfo()
    selected: List[int] = []
    for s in streams:
        kind = s.kind
        if kind is StreamKind.other:
            continue
        bitrate = parse_bitrate(s.bit_rate, field_name=f"streams[{s.index}].bit_rate")
        selected.append(bitrate)
        if kind is StreamKind.video:
            info.video_bitrates.append(bitrate)
            info.video_formats.append(s.codec_name)
        else:
            info.audio_bitrates.append(bitrate)
            info.audio_formats.append(s.codec_name)
    info.bitrate = checked_sum(selected)
    return info


def calculate_pixels(streams: Sequence[Stream]) -> int:
    """Pixel count of the largest video stream, 0 if there is none."""
    return max((s.pixels for s in streams if s.kind is StreamKind.video), default=0)


def describe(
    video_formats: Sequence[str],
    video_bitrates: Sequence[int],
    audio_formats: Sequence[str],
    audio_bitrates: Sequence[int],
) -> Description:
    return Description(
        video_format=FORMAT_SEPARATOR.join(video_formats),
        video_bitrate=checked_sum(video_bitrates),
        audio_format=FORMAT_SEPARATOR.join(audio_formats),
        audio_bitrate=checked_sum(audio_bitrates),
    )
