# vidinfo/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _to_file_mode(v: str | int | None, default: int = 0o644) -> int:
    if v is None or v == "":
        return default
    if isinstance(v, int):
        return v
    s = str(v).strip().lower()
    if s.startswith("0o"):
        s = s[2:]
    return int(s, 8)


class FFProbeConfig(BaseModel):
    bin: str = "ffprobe"
    # None means wait for ffprobe however long it takes
    timeout_sec: Optional[int] = Field(default=None, gt=0)


class OutputConfig(BaseModel):
    file_mode: int = Field(default=0o644, ge=0, le=0o7777)

    @field_validator("file_mode", mode="before")
    @classmethod
    def _octal(cls, v):
        return _to_file_mode(v)


class Settings(BaseSettings):
    # -------- App --------
    app_name: str = "vidinfo"
    log_level: str = "INFO"

    # -------- Sub-configs --------
    ffprobe: FFProbeConfig = FFProbeConfig()
    output: OutputConfig = OutputConfig()

    model_config = SettingsConfigDict(
        env_prefix="VIDINFO_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from vidinfo.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
