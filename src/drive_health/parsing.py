"""Parsing of ``smartctl -a`` text output.

The output differs between SATA and NVMe devices, between smartctl versions and
between platforms, so every extractor here tolerates missing lines and shifted
columns. Nothing in this module raises on malformed input: extractors return
``None`` (or zero counts) when they cannot find what they are looking for.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Tuple

from .models import DeviceType, SectorCounts

_ROTATION_RATE = re.compile(r"rotation\s+rate\s*:\s*(.*)", re.I)
_RPM = re.compile(r"(\d+)\s*rpm", re.I)
_SOLID_STATE = re.compile(r"solid\s+state", re.I)

SOLID_STATE_MODEL_WORDS = (
    "ssd",
    "nvme",
    "pcie",
    "pci-e",
    "m.2",
    "solid state",
    "crucial",
    "sandisk",
    "kingston",
    "adata",
    "hynix",
    "evo",
    "mx500",
)

_NVME = re.compile(r"nvme", re.I)
_PERCENT_USED_LABEL = re.compile(r"percent(?:age)?[ _]used", re.I)
# NVMe SMART log byte 5 is "Percentage Used"; some tools print it by code
_PERCENT_USED_CODE = re.compile(r"^\s*(?:0x)?05\b", re.I)
_INTEGER = re.compile(r"\d+")

WEAR_ATTRIBUTES = (
    re.compile(r"wear[ _]level(?:l)?ing[ _]count", re.I),
    re.compile(r"media[ _]wearout[ _]indicator", re.I),
    re.compile(r"ssd[ _]life[ _]left", re.I),
    re.compile(r"percent[ _]lifetime[ _]remain", re.I),
)

_STRICT_ROW = re.compile(
    r"^\s*(\d+)\s+([A-Za-z][\w\- ]*?)\s+(0x[0-9a-f]+)\s+(\d{1,3})(?:\s|$)", re.I
)
_SHORT_INT = re.compile(r"\d{1,3}")

_REALLOCATED = re.compile(r"reallocated[ _]sector[ _]c(?:oun)?t", re.I)
_PENDING = re.compile(r"current[ _]pending[ _]sector", re.I)
_OFFLINE = re.compile(r"offline[ _]uncorrectable", re.I)


def _lines(text: Optional[str]) -> List[str]:
    return text.splitlines() if text else []


def rotation_rate(text: Optional[str]) -> Optional[bool]:
    """True for a solid-state rotation rate, False for an RPM value, None otherwise."""
    for line in _lines(text):
        m = _ROTATION_RATE.search(line)
        if not m:
            continue
        value = m.group(1)
        if _SOLID_STATE.search(value):
            return True
        if _RPM.search(value):
            return False
        return None
    return None


def model_looks_solid_state(model: Optional[str]) -> bool:
    lowered = (model or "").lower()
    return any(word in lowered for word in SOLID_STATE_MODEL_WORDS)


def detect_solid_state(text: Optional[str], model: Optional[str]) -> bool:
    rate = rotation_rate(text)
    if rate is not None:
        return rate
    return model_looks_solid_state(model)


def mentions_nvme(text: Optional[str], model: Optional[str]) -> bool:
    if model and _NVME.search(model):
        return True
    return any(_NVME.search(line) for line in _lines(text))


def detect_device_type(text: Optional[str], model: Optional[str]) -> DeviceType:
    if not detect_solid_state(text, model):
        return DeviceType.HDD
    if mentions_nvme(text, model):
        return DeviceType.SSD_NVME
    return DeviceType.SSD_SATA


def nvme_percentage_used(text: Optional[str]) -> Optional[int]:
    for line in _lines(text):
        label = _PERCENT_USED_LABEL.search(line) or _PERCENT_USED_CODE.match(line)
        if not label:
            continue
        m = _INTEGER.search(line, label.end())
        if m:
            return int(m.group(0))
    return None


# Wear value strategies. Each one takes a single attribute line and returns the
# normalized value, or None when it does not apply to that line.

def strict_columns(line: str) -> Optional[int]:
    """``ID# ATTRIBUTE_NAME FLAG VALUE ...`` with a hex flag column."""
    m = _STRICT_ROW.match(line)
    if not m:
        return None
    return int(m.group(4))


def fourth_token(line: str) -> Optional[int]:
    tokens = line.split()
    if len(tokens) < 4 or not _SHORT_INT.fullmatch(tokens[3]):
        return None
    return int(tokens[3])


def first_percent_token(line: str) -> Optional[int]:
    for token in line.split():
        if token.isdecimal() and 0 <= int(token) <= 100:
            return int(token)
    return None


WEAR_STRATEGIES: Tuple[Tuple[str, Callable[[str], Optional[int]]], ...] = (
    ("columns", strict_columns),
    ("tokens", fourth_token),
    ("any_percent", first_percent_token),
)


def wear_value_from_line(line: str) -> Optional[int]:
    for _name, strategy in WEAR_STRATEGIES:
        value = strategy(line)
        if value is not None:
            return min(value, 100)
    return None


def sata_wear_value(text: Optional[str]) -> Optional[int]:
    lines = _lines(text)
    for attribute in WEAR_ATTRIBUTES:
        for line in lines:
            if not attribute.search(line):
                continue
            value = wear_value_from_line(line)
            if value is not None:
                return value
    return None


def solid_state_health(text: Optional[str], nvme: bool) -> Optional[int]:
    if nvme:
        used = nvme_percentage_used(text)
        if used is None:
            return None
        return max(0, 100 - used)
    return sata_wear_value(text)


def _last_count(line: str) -> int:
    tokens = line.split()
    if tokens and tokens[-1].isdecimal():
        return int(tokens[-1])
    return 0


def sector_counts(text: Optional[str]) -> SectorCounts:
    found = {}
    for line in _lines(text):
        for key, pattern in (
            ("reallocated", _REALLOCATED),
            ("pending", _PENDING),
            ("offline_uncorrectable", _OFFLINE),
        ):
            if key not in found and pattern.search(line):
                found[key] = _last_count(line)
    return SectorCounts(**found)
