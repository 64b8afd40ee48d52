from __future__ import annotations

import logging
import platform
import re
import subprocess
from pathlib import Path
from shutil import which
from typing import Dict, List, Optional, Tuple

from .config import Settings

logger = logging.getLogger(__name__)

# smartctl exit status is a bitmask: bit 0 is a command line error, bit 1 means
# the device could not be opened. Higher bits describe the disk, not the query.
QUERY_FAILED_BITS = 0b11

FAILURE_MARKERS = (
    "open device",
    "no such device",
    "unsupported device",
    "unknown usb bridge",
    "please specify device type",
    "command failed",
    "permission denied",
)

FALLBACK_TYPES = ("ata", "sat", "scsi", "auto")

_NVME_MODEL = re.compile(r"nvme", re.I)
_PHYSICAL_DRIVE_INDEX = re.compile(r"physicaldrive(\d+)$", re.I)

# Only /dev/sda../dev/sdz are mapped
_REMAP_LIMIT = 26

_WINDOWS_CANDIDATES = [
    r"C:\Program Files\smartmontools\bin\smartctl.exe",
    r"C:\Program Files\smartmontools\smartctl.exe",
    r"C:\Program Files (x86)\smartmontools\bin\smartctl.exe",
    r"C:\Program Files (x86)\smartmontools\smartctl.exe",
]

_SMARTCTL_PATHS: Dict[Optional[str], str] = {}

Attempt = Tuple[str, Optional[str]]


def has_smartctl(settings: Optional[Settings] = None) -> bool:
    return find_smartctl(settings) is not None


def find_smartctl(settings: Optional[Settings] = None) -> Optional[str]:
    configured = settings.smartctl_path if settings else None
    if configured in _SMARTCTL_PATHS:
        return _SMARTCTL_PATHS[configured]

    path = None
    if configured:
        path = which(configured) or (configured if Path(configured).is_file() else None)
    else:
        path = which("smartctl")
        if not path and platform.system() == "Windows":
            path = next((c for c in _WINDOWS_CANDIDATES if Path(c).is_file()), None)
    if path:
        _SMARTCTL_PATHS[configured] = path
    return path


def remapped_device_name(device_id: str) -> Optional[str]:
    m = _PHYSICAL_DRIVE_INDEX.search(device_id)
    if not m:
        return None
    index = int(m.group(1))
    if index >= _REMAP_LIMIT:
        return None
    return f"/dev/sd{chr(ord('a') + index)}"


def build_attempts(device_id: str, model: Optional[str], settings: Settings) -> List[Attempt]:
    attempts: List[Attempt] = [(device_id, None)]
    if model and _NVME_MODEL.search(model):
        attempts.append((device_id, "nvme"))
    attempts.extend((device_id, dev_type) for dev_type in FALLBACK_TYPES)
    if settings.remap_physical_drive:
        remapped = remapped_device_name(device_id)
        if remapped and remapped != device_id:
            attempts.append((remapped, None))
    return attempts


def is_usable_output(returncode: int, output: str) -> bool:
    if returncode & QUERY_FAILED_BITS:
        return False
    lowered = output.lower()
    return not any(marker in lowered for marker in FAILURE_MARKERS)


def _run_smartctl(exe: str, device: str, dev_type: Optional[str], timeout: float) -> Optional[str]:
    cmd = [exe, "-a"]
    if dev_type:
        cmd.extend(["-d", dev_type])
    cmd.append(device)
    try:
        proc = subprocess.run(
            cmd, capture_output=True, encoding="utf-8", errors="replace", timeout=timeout
        )
    except (OSError, ValueError, subprocess.SubprocessError) as exc:
        logger.debug("smartctl %s (-d %s) could not run: %s", device, dev_type, exc)
        return None
    output = proc.stdout or ""
    if not is_usable_output(proc.returncode, output + (proc.stderr or "")):
        logger.debug("smartctl %s (-d %s) rejected, exit status %s", device, dev_type, proc.returncode)
        return None
    return output


def query_device(device_id: str, model: Optional[str], settings: Settings) -> Optional[str]:
    """Return the first usable ``smartctl -a`` output for a device, or None."""
    exe = find_smartctl(settings)
    if not exe:
        logger.warning("smartctl not found; no SMART data for %s", device_id)
        return None
    for device, dev_type in build_attempts(device_id, model, settings):
        output = _run_smartctl(exe, device, dev_type, settings.timeout)
        if output is not None:
            logger.info("SMART data for %s read via %s (-d %s)", device_id, device, dev_type or "none")
            return output
    logger.warning("all smartctl queries failed for %s", device_id)
    return None
