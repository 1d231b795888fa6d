"""Package settings loaded from environment variables."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


@dataclass(frozen=True)
class Settings:
    log_level: str = "INFO"
    log_format: str = "%(asctime)s [LOGSCONFIG] %(levelname)s %(message)s"
    warn_unknown_keys: bool = True

    @classmethod
    def from_env(cls) -> Settings:
        """Create Settings, overriding defaults with env vars."""
        return cls(
            log_level=os.environ.get("LOG_LEVEL", cls.log_level).strip().upper(),
            log_format=os.environ.get("LOG_FORMAT", cls.log_format),
            warn_unknown_keys=_parse_bool(os.environ.get("WARN_UNKNOWN_KEYS", "true")),
        )


def setup_logging(settings: Settings) -> None:
    """Configure root logging for an application embedding this package.

    Unknown level names fall back to INFO.
    """
    level = settings.log_level if settings.log_level in LOG_LEVELS else "INFO"
    logging.basicConfig(
        level=getattr(logging, level),
        format=settings.log_format,
        stream=sys.stderr,
        force=True,
    )
