from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final

ENV_MAX_UPLOAD_BYTES: Final[str] = "KKEXTRACT_MAX_UPLOAD_BYTES"
ENV_MAX_BOXES: Final[str] = "KKEXTRACT_MAX_BOXES"
ENV_LOG_LEVEL: Final[str] = "KKEXTRACT_LOG_LEVEL"

DEFAULT_MAX_UPLOAD_BYTES: Final[int] = 2 * 1024 * 1024
DEFAULT_MAX_BOXES: Final[int] = 5000
DEFAULT_LOG_LEVEL: Final[str] = "INFO"
SUPPORTED_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass(frozen=True)
class Settings:
    max_upload_bytes: int
    max_boxes: int
    log_level: str


def _get_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an int, got: {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be > 0, got: {value}")
    return value


def _get_log_level() -> str:
    raw = os.getenv(ENV_LOG_LEVEL)
    if raw is None or not raw.strip():
        return DEFAULT_LOG_LEVEL
    value = raw.strip().upper()
    if value not in SUPPORTED_LOG_LEVELS:
        raise ValueError(
            f"{ENV_LOG_LEVEL} must be one of {', '.join(SUPPORTED_LOG_LEVELS)}, got: {raw!r}"
        )
    return value


def get_settings() -> Settings:
    return Settings(
        max_upload_bytes=_get_positive_int(ENV_MAX_UPLOAD_BYTES, DEFAULT_MAX_UPLOAD_BYTES),
        max_boxes=_get_positive_int(ENV_MAX_BOXES, DEFAULT_MAX_BOXES),
        log_level=_get_log_level(),
    )
