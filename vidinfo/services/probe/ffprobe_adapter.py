# vidinfo/services/probe/ffprobe_adapter.py
from __future__ import annotations

import shutil
from pathlib import Path
from typing import Optional

from vidinfo.common.errors import FFprobeError
from vidinfo.common.logging import get_logger
from vidinfo.common.probe.ffprobe_helpers import build_ffprobe_cmd, parse_probe_output, run_ffprobe
from vidinfo.common.settings import get_settings
from vidinfo.domain.entities.probe import ProbeResult
from vidinfo.domain.ports.probe import MediaProbePort

logger = get_logger(__name__)


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    Holds no per-call state, so one instance may be shared between threads.
    """

    def __init__(self, ffprobe_bin: Optional[str] = None, timeout_sec: Optional[int] = None):
        cfg = get_settings()
        candidate = ffprobe_bin or cfg.ffprobe.bin
        if Path(candidate).name == candidate:
            # bare name: try to resolve absolute path for nicer errors
            resolved = shutil.which(candidate)
            if not resolved:
                raise FFprobeError(f"{candidate} not found on PATH; set VIDINFO_FFPROBE__BIN or install ffmpeg.")
            candidate = resolved

        self.ffprobe_bin = candidate
        self.timeout_sec = timeout_sec if timeout_sec is not None else cfg.ffprobe.timeout_sec

    # ---- Port API -------------------------------------------------------------
    def probe(self, path: str | Path) -> ProbeResult:
        cmd = build_ffprobe_cmd(path, self.ffprobe_bin)
        try:
            raw = run_ffprobe(cmd, timeout_sec=self.timeout_sec)
        except FFprobeError as e:
            logger.error("ffprobe failed for %s: %s", path, e)
            raise
        return parse_probe_output(raw)
