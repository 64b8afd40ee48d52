"""SMART-based drive health check."""

from .config import Settings
from .models import Device, DeviceReport, DeviceType, HealthVerdict, Severity
from .platform import get_devices
from .rules import classify, order_reports
from .scan import evaluate, scan_devices
from .smartctl import has_smartctl, query_device

__all__ = [
    "Settings",
    "Device",
    "DeviceReport",
    "DeviceType",
    "HealthVerdict",
    "Severity",
    "get_devices",
    "classify",
    "order_reports",
    "evaluate",
    "scan_devices",
    "has_smartctl",
    "query_device",
]
