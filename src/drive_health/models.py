from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class DeviceType(Enum):
    SSD_NVME = "NVMe SSD"
    SSD_SATA = "SATA SSD"
    HDD = "HDD"

    @property
    def solid_state(self) -> bool:
        return self is not DeviceType.HDD


class Severity(Enum):
    GOOD = "Good"
    CAUTION = "Caution"
    BAD = "Bad"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Device:
    device_id: str
    model: str
    drive_letters: Tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class HealthVerdict:
    severity: Severity
    health_percent: Optional[int]
    detail: str


@dataclass(frozen=True)
class SectorCounts:
    reallocated: int = 0
    pending: int = 0
    offline_uncorrectable: int = 0


@dataclass(frozen=True)
class DeviceReport:
    device: Device
    device_type: Optional[DeviceType]
    verdict: HealthVerdict

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deviceId": self.device.device_id,
            "model": self.device.model,
            "driveLetters": list(self.device.drive_letters),
            "deviceType": self.device_type.value if self.device_type else None,
            "severity": self.verdict.severity.value,
            "healthPercent": self.verdict.health_percent,
            "detail": self.verdict.detail,
        }
