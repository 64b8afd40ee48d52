from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .models import Device, DeviceReport, DeviceType, HealthVerdict, SectorCounts, Severity
from .parsing import detect_device_type, sector_counts, solid_state_health

GOOD_MIN_PERCENT = 90
CAUTION_MIN_PERCENT = 70

NO_DATA_DETAIL = "diagnostic query failed for this device"
NO_WEAR_DETAIL = "could not parse reliable wear indicator"
NO_DEFECTS_DETAIL = "no critical indicators present"


def verdict_for_ssd(health_percent: Optional[int]) -> HealthVerdict:
    if health_percent is None:
        return HealthVerdict(Severity.UNKNOWN, None, NO_WEAR_DETAIL)
    if health_percent >= GOOD_MIN_PERCENT:
        severity = Severity.GOOD
    elif health_percent >= CAUTION_MIN_PERCENT:
        severity = Severity.CAUTION
    else:
        severity = Severity.BAD
    return HealthVerdict(severity, health_percent, f"Health {health_percent}%")


def verdict_for_hdd(counts: SectorCounts) -> HealthVerdict:
    reasons: List[str] = []
    if counts.pending > 0:
        reasons.append(f"{counts.pending} pending sector(s)")
    if counts.offline_uncorrectable > 0:
        reasons.append(f"{counts.offline_uncorrectable} offline uncorrectable sector(s)")
    if reasons:
        return HealthVerdict(Severity.BAD, None, "; ".join(reasons))
    if counts.reallocated > 0:
        return HealthVerdict(Severity.CAUTION, None, f"{counts.reallocated} reallocated sector(s)")
    return HealthVerdict(Severity.GOOD, None, NO_DEFECTS_DETAIL)


def classify(
    text: Optional[str], model: Optional[str]
) -> Tuple[Optional[DeviceType], HealthVerdict]:
    if not text or not text.strip():
        return None, HealthVerdict(Severity.UNKNOWN, None, NO_DATA_DETAIL)

    device_type = detect_device_type(text, model)
    if device_type.solid_state:
        health = solid_state_health(text, nvme=device_type is DeviceType.SSD_NVME)
        return device_type, verdict_for_ssd(health)
    return device_type, verdict_for_hdd(sector_counts(text))


def sort_key(device: Device) -> Tuple[int, str]:
    if device.drive_letters:
        return (0, min(device.drive_letters))
    return (1, "")


def order_reports(reports: Iterable[DeviceReport]) -> List[DeviceReport]:
    return sorted(reports, key=lambda r: sort_key(r.device))
