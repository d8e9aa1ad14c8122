"""Runtime configuration for the command-line interface."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .category import DEFAULT_THRESHOLD
from .errors import InvalidThresholdError
from .storage import DEFAULT_SAMPLE_EXTENSION

DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_threshold(raw_value: str) -> float:
    try:
        value = float(raw_value)
    except ValueError:
        raise ValueError(f"TEXTCAT_THRESHOLD must be a number, got {raw_value!r}") from None
    if not 0.0 < value < 1.0:
        raise InvalidThresholdError(value)
    return value


@dataclass(frozen=True)
class Settings:
    """Validated settings read from ``TEXTCAT_*`` environment variables."""

    profiles_path: Optional[Path] = None
    threshold: float = DEFAULT_THRESHOLD
    sample_extension: str = DEFAULT_SAMPLE_EXTENSION
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        profiles_raw = source.get("TEXTCAT_PROFILES", "").strip()
        profiles_path = Path(profiles_raw).expanduser() if profiles_raw else None

        threshold_raw = source.get("TEXTCAT_THRESHOLD", "").strip()
        threshold = _parse_threshold(threshold_raw) if threshold_raw else DEFAULT_THRESHOLD

        extension = source.get("TEXTCAT_SAMPLE_EXTENSION", DEFAULT_SAMPLE_EXTENSION).strip().lstrip(".")
        if not extension:
            raise ValueError("TEXTCAT_SAMPLE_EXTENSION cannot be empty")

        log_level = source.get("TEXTCAT_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(
                f"TEXTCAT_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}"
            )

        return cls(
            profiles_path=profiles_path,
            threshold=threshold,
            sample_extension=extension,
            log_level=log_level,
        )
