"""One scan: acquire SMART text once per device, classify it once, order the results.

The report list produced here is shared by the window and the log file, so both
always show the same verdict for a device.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from .config import Settings
from .models import Device, DeviceReport, HealthVerdict, Severity
from .platform import get_devices
from .rules import classify, order_reports
from .smartctl import query_device

logger = logging.getLogger(__name__)

Fetch = Callable[[Device], Optional[str]]


def evaluate(device: Device, raw_text: Optional[str]) -> DeviceReport:
    try:
        device_type, verdict = classify(raw_text, device.model)
    except Exception as exc:
        logger.exception("classification failed for %s", device.device_id)
        return DeviceReport(
            device, None, HealthVerdict(Severity.UNKNOWN, None, f"classification failed: {exc}")
        )
    logger.info("%s: %s (%s)", device.device_id, verdict.severity.value, verdict.detail)
    return DeviceReport(device, device_type, verdict)


def _fetch_one(device: Device, fetch: Fetch) -> Optional[str]:
    try:
        return fetch(device)
    except Exception:
        logger.exception("SMART query failed for %s", device.device_id)
        return None


def scan_devices(devices: Iterable[Device], fetch: Fetch) -> List[DeviceReport]:
    return order_reports(evaluate(device, _fetch_one(device, fetch)) for device in devices)


def run(settings: Settings) -> List[DeviceReport]:
    devices = get_devices()
    logger.info("found %d device(s)", len(devices))
    return scan_devices(
        devices, lambda device: query_device(device.device_id, device.model, settings)
    )
