"""CLI settings resolved from ``PQCONFORM_*`` environment variables."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from pqconform.registry import DEFAULT_ADAPTERS

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def _int_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer") from exc
    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value


@dataclass(frozen=True)
class Settings:
    jobs: int = 1
    log_level: str = "WARNING"
    adapters: Tuple[str, ...] = DEFAULT_ADAPTERS

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        level = (env.get("PQCONFORM_LOG_LEVEL") or "WARNING").upper()
        if level not in _LEVELS:
            raise ValueError(f"PQCONFORM_LOG_LEVEL must be one of {sorted(_LEVELS)}")
        adapters_raw = env.get("PQCONFORM_ADAPTERS")
        adapters = (
            tuple(a.strip() for a in adapters_raw.split(",") if a.strip())
            if adapters_raw
            else DEFAULT_ADAPTERS
        )
        return cls(
            jobs=_int_env(env, "PQCONFORM_JOBS", 1),
            log_level=level,
            adapters=adapters,
        )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
