from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from .config import Settings
from .models import DeviceReport, Severity

logger = logging.getLogger(__name__)

LOG_FILE_TEMPLATE = "disk_health_{day}.log"

SEVERITY_COLORS: Dict[Severity, str] = {
    Severity.GOOD: "#2e7d32",  # green
    Severity.CAUTION: "#d4a017",  # amber
    Severity.BAD: "#c62828",  # red
    Severity.UNKNOWN: "#808080",  # gray
}


def format_block(report: DeviceReport) -> str:
    device = report.device
    verdict = report.verdict
    letters = f" ({', '.join(device.drive_letters)})" if device.drive_letters else ""
    percent = f" ({verdict.health_percent}%)" if verdict.health_percent is not None else ""
    return f"{device.model}{letters} [{device.device_id}]: {verdict.severity.value}{percent}\n\n"


def log_path(settings: Settings, day: Optional[date] = None) -> Path:
    day = day or date.today()
    return settings.log_dir / LOG_FILE_TEMPLATE.format(day=day.isoformat())


def write_log(
    reports: Iterable[DeviceReport], settings: Settings, day: Optional[date] = None
) -> Optional[Path]:
    """Append one block per device to the dated log; returns None if it could not be written."""
    path = log_path(settings, day)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a", encoding="utf-8") as f:
            for report in reports:
                f.write(format_block(report))
    except OSError as exc:
        logger.error("could not write log %s: %s", path, exc)
        return None
    return path


def export_json(reports: Iterable[DeviceReport], path: Union[str, Path]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump([r.to_dict() for r in reports], f, ensure_ascii=False, indent=2)
