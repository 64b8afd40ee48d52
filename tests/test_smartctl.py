import subprocess
from types import SimpleNamespace

import pytest

from drive_health import smartctl
from drive_health.config import Settings
from drive_health.smartctl import build_attempts, find_smartctl, is_usable_output, query_device, remapped_device_name

from samples import hdd


class FakeRun:
    """Replays one result per smartctl call; exceptions are raised."""

    def __init__(self, results):
        self.results = list(results)
        self.calls = []
        self.kwargs = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        self.kwargs.append(kwargs)
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        returncode, stdout = result
        return SimpleNamespace(returncode=returncode, stdout=stdout, stderr="")


@pytest.fixture
def fake_smartctl(monkeypatch):
    monkeypatch.setattr(smartctl, "find_smartctl", lambda settings=None: "smartctl")

    def install(results):
        fake = FakeRun(results)
        monkeypatch.setattr(smartctl.subprocess, "run", fake)
        return fake

    return install


def test_attempt_order_for_nvme_model():
    attempts = build_attempts("//./PhysicalDrive1", "WD Black NVMe 1TB", Settings())
    assert attempts == [
        ("//./PhysicalDrive1", None),
        ("//./PhysicalDrive1", "nvme"),
        ("//./PhysicalDrive1", "ata"),
        ("//./PhysicalDrive1", "sat"),
        ("//./PhysicalDrive1", "scsi"),
        ("//./PhysicalDrive1", "auto"),
        ("/dev/sdb", None),
    ]


def test_attempts_without_nvme_or_remap():
    attempts = build_attempts("/dev/sda", "ST2000DM008", Settings())
    assert [t for _, t in attempts] == [None, "ata", "sat", "scsi", "auto"]

    attempts = build_attempts("//./PhysicalDrive0", "ST2000DM008", Settings(remap_physical_drive=False))
    assert ("/dev/sda", None) not in attempts


def test_remap_is_limited_to_26_devices():
    assert remapped_device_name("//./PhysicalDrive0") == "/dev/sda"
    assert remapped_device_name("//./PhysicalDrive25") == "/dev/sdz"
    assert remapped_device_name("//./PhysicalDrive26") is None
    assert remapped_device_name("/dev/nvme0n1") is None


def test_usable_output():
    assert is_usable_output(0, hdd())
    # bit 2 and above describe the disk, not the query
    assert is_usable_output(4, hdd())
    assert not is_usable_output(2, hdd())
    assert not is_usable_output(0, "Smartctl open device: /dev/sdz failed: No such device")


@pytest.mark.parametrize("marker", smartctl.FAILURE_MARKERS)
def test_every_failure_marker_rejects_output(marker):
    assert not is_usable_output(0, hdd() + "\n" + marker + "\n")
    assert not is_usable_output(0, "/dev/sdb: " + marker.upper())



def test_stops_at_first_success(fake_smartctl):
    fake = fake_smartctl([(2, ""), (0, "/dev/sda: Unknown USB bridge"), (0, hdd())])
    assert query_device("/dev/sda", "ST2000DM008", Settings()) == hdd()
    assert fake.calls[0] == ["smartctl", "-a", "/dev/sda"]
    assert fake.calls[1] == ["smartctl", "-a", "-d", "ata", "/dev/sda"]
    assert len(fake.calls) == 3


def test_transport_failure_does_not_abort(fake_smartctl):
    fake = fake_smartctl([FileNotFoundError("smartctl"), subprocess.TimeoutExpired("smartctl", 30), (0, hdd())])
    assert query_device("/dev/sda", "ST2000DM008", Settings()) == hdd()
    assert len(fake.calls) == 3


def test_all_attempts_fail(fake_smartctl):
    fake = fake_smartctl([(1, "")] * 7)
    assert query_device("//./PhysicalDrive2", "Disk", Settings()) is None
    assert fake.calls[-1] == ["smartctl", "-a", "/dev/sdc"]


def test_no_smartctl_is_unavailable(monkeypatch):
    monkeypatch.setattr(smartctl, "find_smartctl", lambda settings=None: None)
    assert query_device("/dev/sda", "Disk", Settings()) is None


def test_find_configured_smartctl(tmp_path):
    exe = tmp_path / "smartctl"
    exe.write_text("")
    assert find_smartctl(Settings(smartctl_path=str(exe))) == str(exe)
    assert find_smartctl(Settings(smartctl_path=str(tmp_path / "missing"))) is None


def test_undecodable_output_does_not_abort(fake_smartctl):
    bad_bytes = UnicodeDecodeError("utf-8", b"Serial Number: \xff\xfe", 15, 16, "invalid start byte")
    fake = fake_smartctl([bad_bytes, (0, hdd())])
    assert query_device("/dev/sda", "ST2000DM008", Settings()) == hdd()
    assert fake.calls[1] == ["smartctl", "-a", "-d", "ata", "/dev/sda"]


def test_output_is_decoded_leniently(fake_smartctl):
    fake = fake_smartctl([(0, hdd())])
    query_device("/dev/sda", "ST2000DM008", Settings())
    assert fake.kwargs[0]["encoding"] == "utf-8"
    assert fake.kwargs[0]["errors"] == "replace"
