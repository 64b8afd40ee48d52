from __future__ import annotations

import ctypes
import json
import os
import platform
import subprocess
from typing import Any, Dict, List

from .models import Device


def _run_powershell_json(cmd: str) -> Any:
    ps_cmd = ["powershell", "-NoProfile", "-Command", cmd]
    proc = subprocess.run(ps_cmd, capture_output=True, text=True)
    if not proc.stdout.strip():
        raise RuntimeError(proc.stderr.strip() or "PowerShell returned no output")
    return json.loads(proc.stdout)


def _as_list(value: Any) -> List[Dict[str, Any]]:
    # ConvertTo-Json emits a bare object for a single result
    if isinstance(value, dict):
        return [value]
    return list(value or [])


def _windows_devices() -> List[Device]:
    disks = _as_list(_run_powershell_json(
        "Get-Disk | Select-Object Number,FriendlyName | ConvertTo-Json -Depth 3"
    ))
    try:
        parts = _as_list(_run_powershell_json(
            "Get-Partition | Where-Object DriveLetter | Select-Object DiskNumber,DriveLetter | ConvertTo-Json -Depth 3"
        ))
    except RuntimeError:
        # no partition has a drive letter
        parts = []

    disk_to_letters: Dict[int, List[str]] = {}
    for p in parts:
        dn = p.get("DiskNumber")
        dl = p.get("DriveLetter")
        if dn is None or not dl:
            continue
        disk_to_letters.setdefault(int(dn), []).append(f"{dl}:")

    result: List[Device] = []
    for d in disks:
        num = d.get("Number")
        if num is None:
            continue
        result.append(
            Device(
                device_id=f"//./PhysicalDrive{num}",
                model=d.get("FriendlyName") or "",
                drive_letters=tuple(sorted(set(disk_to_letters.get(int(num), [])))),
            )
        )
    return result


def _mountpoints(dev: Dict[str, Any]) -> List[str]:
    found: List[str] = []
    for child in dev.get("children", []) or []:
        mp = child.get("mountpoint")
        if mp:
            found.append(mp)
        found.extend(_mountpoints(child))
    return found


def _linux_devices() -> List[Device]:
    cmd = ["lsblk", "-J", "-o", "NAME,TYPE,MOUNTPOINT,MODEL"]
    proc = subprocess.run(cmd, capture_output=True, text=True)
    if not proc.stdout.strip():
        raise RuntimeError(proc.stderr.strip() or "lsblk returned no output")
    data = json.loads(proc.stdout)

    result: List[Device] = []
    for dev in data.get("blockdevices", []):
        if dev.get("type") != "disk":
            continue
        result.append(
            Device(
                device_id=f"/dev/{dev.get('name')}",
                model=(dev.get("model") or "").strip(),
                drive_letters=tuple(sorted(set(_mountpoints(dev)))),
            )
        )
    return result


def get_devices() -> List[Device]:
    system = platform.system()
    if system == "Windows":
        return _windows_devices()
    if system == "Linux":
        return _linux_devices()
    raise RuntimeError(f"Unsupported OS: {system}")


def is_elevated() -> bool:
    if platform.system() == "Windows":
        try:
            return bool(ctypes.windll.shell32.IsUserAnAdmin())
        except (AttributeError, OSError):
            return False
    return os.geteuid() == 0
