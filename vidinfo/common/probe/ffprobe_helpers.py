# vidinfo/common/probe/ffprobe_helpers.py
from __future__ import annotations
from pathlib import Path
from typing import List, Optional
import shlex
import subprocess

from pydantic import ValidationError

from vidinfo.common.errors import FFprobeError
from vidinfo.common.logging import get_logger
from vidinfo.domain.entities.probe import ProbeResult

logger = get_logger(__name__)

FFPROBE_ARGS = (
    "-v", "quiet",
    "-print_format", "json",
    "-show_format",
    "-show_streams",
)


def build_ffprobe_cmd(input_path: str | Path, ffprobe_bin: str = "ffprobe") -> List[str]:
    """
    Build the ffprobe command line. The path is passed through untouched as the
    last argument; nothing is shell-escaped.
    """
    return [ffprobe_bin, *FFPROBE_ARGS, str(input_path)]


def run_ffprobe(cmd: List[str], timeout_sec: Optional[int] = None) -> bytes:
    """
    Execute ffprobe and return its raw stdout. Raises FFprobeError if it cannot
    be started, times out, or exits non-zero.
    """
    logger.debug("ffprobe cmd: %s", " ".join(shlex.quote(p) for p in cmd))
    try:
        proc = subprocess.run(
            cmd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            timeout=timeout_sec,
            check=False,  # we handle rc manually to attach stderr
        )
    except subprocess.TimeoutExpired as e:
        raise FFprobeError(f"ffprobe timed out after {timeout_sec}s", stderr=str(e)) from e
    except OSError as e:
        raise FFprobeError(f"Failed to execute {cmd[0]}: {e}", stderr=str(e)) from e

    if proc.returncode != 0:
        stderr = (proc.stderr or b"").decode("utf-8", errors="replace")
        raise FFprobeError(
            f"ffprobe returned non-zero exit code {proc.returncode}",
            stderr=stderr,
            rc=proc.returncode,
        )
    return proc.stdout or b""


def parse_probe_output(raw: bytes | str) -> ProbeResult:
    """
    Validate ffprobe JSON into a ProbeResult. Safe to call in unit tests with
    fixture JSON.
    """
    try:
        return ProbeResult.model_validate_json(raw)
    except ValidationError as e:
        logger.exception("Failed to parse ffprobe JSON")
        raise FFprobeError(f"ffprobe produced invalid JSON: {e.error_count()} error(s)",
                           stderr=str(e)) from e
