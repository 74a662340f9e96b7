# vidinfo/services/video_info.py
from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from vidinfo.common.logging import get_logger
from vidinfo.domain.entities.video_info import VideoInfo
from vidinfo.domain.ports.probe import MediaProbePort
from vidinfo.services.probe.ffprobe_adapter import FFprobeAdapter

logger = get_logger(__name__)


def new_video_info(filename: str | Path, *, prober: Optional[MediaProbePort] = None) -> VideoInfo:
    """
    Probe `filename` and build its VideoInfo.

    `at_time` is taken before ffprobe starts. Raises FFprobeError,
    ProbeParseError or BitrateOverflowError; nothing is returned on failure.
    """
    at_time = int(time.time())
    prober = prober or FFprobeAdapter()
    probe_result = prober.probe(filename)
    info = VideoInfo.from_probe_result(probe_result, filename, at_time)
    logger.info("%s: %s (%ss, %s px)", info.basename, info.simple_description, info.duration, info.pixels)
    return info
