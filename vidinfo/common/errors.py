"""
vidinfo exception hierarchy.

Exception Hierarchy:
    VideoInfoError (base)
    ├── FFprobeError - ffprobe could not run, failed, or printed unusable JSON
    ├── ProbeParseError - probe fields that must be numeric are not
    ├── BitrateOverflowError - bitrate total does not fit in a signed 64-bit int
    └── VideoInfoWriteError - summary could not be serialized or written
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional


class VideoInfoError(Exception):
    """Base exception for all vidinfo errors."""

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class FFprobeError(VideoInfoError):
    """Adapter-level error for probe failures."""

    def __init__(
        self,
        message: str,
        *,
        stderr: Optional[str] = None,
        rc: Optional[int] = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if rc is not None:
            details["rc"] = rc
        if stderr:
            details["stderr"] = stderr
        super().__init__(message, details=details)
        self.stderr = stderr
        self.rc = rc


class ProbeParseError(VideoInfoError, ValueError):
    """A probe field could not be parsed as the number it must hold."""

    def __init__(self, message: str, *, field: str, value: Any) -> None:
        super().__init__(message, details={"field": field, "value": value})
        self.field = field
        self.value = value


class BitrateOverflowError(VideoInfoError, OverflowError):
    """Summing bitrates would exceed the signed 64-bit maximum."""


class VideoInfoWriteError(VideoInfoError, OSError):
    """The summary record could not be written to disk."""

    def __init__(self, message: str, *, path: Path | str) -> None:
        super().__init__(message, details={"path": str(path)})
        self.path = path
