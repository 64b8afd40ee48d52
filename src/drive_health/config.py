"""Runtime settings, read from ``DRIVE_HEALTH_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_TIMEOUT = 30.0
DEFAULT_LOG_LEVEL = "WARNING"

_FALSE_WORDS = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    smartctl_path: Optional[str] = None
    log_dir: Path = Path(".")
    log_level: str = DEFAULT_LOG_LEVEL
    timeout: float = DEFAULT_TIMEOUT
    # PhysicalDriveN -> /dev/sdX fallback; only meaningful for N < 26
    remap_physical_drive: bool = True

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            smartctl_path=env.get("DRIVE_HEALTH_SMARTCTL") or None,
            log_dir=Path(env.get("DRIVE_HEALTH_LOG_DIR") or "."),
            log_level=(env.get("DRIVE_HEALTH_LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper(),
            timeout=_parse_timeout(env.get("DRIVE_HEALTH_TIMEOUT")),
            remap_physical_drive=(env.get("DRIVE_HEALTH_REMAP", "").strip().lower() not in _FALSE_WORDS),
        )


def _parse_timeout(value: Optional[str]) -> float:
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else DEFAULT_TIMEOUT
