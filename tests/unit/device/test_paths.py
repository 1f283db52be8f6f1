"""Unit tests for device path resolution."""
import pytest

from drive_reconciler.config import DeviceConfig
from drive_reconciler.device.paths import resolve_root_block_path


@pytest.fixture
def device_config():
    return DeviceConfig(
        host_dev_root="/dev",
        direct_csi_dev_root="/var/lib/direct-csi/devices",
        direct_csi_partition_infix="-part-",
        host_partition_infix="",
    )


@pytest.mark.parametrize("dev_name, expected", [
    ("/dev/sda1", "/dev/sda1"),
    ("/dev/mapper/vg0-data", "/dev/mapper/vg0-data"),
    ("sda", "/dev/sda"),
    ("nvme0n1p1", "/dev/nvme0n1p1"),
    ("sda-part-1", "/dev/sda1"),
    ("/var/lib/direct-csi/devices/sdb-part-3", "/dev/sdb3"),
    ("/var/lib/direct-csi/devices/nvme0n1", "/dev/nvme0n1"),
    ("mapper/vg0-data", "/dev/mapper/vg0-data"),
])
def test_resolve_root_block_path(device_config, dev_name, expected):
    assert resolve_root_block_path(dev_name, device_config) == expected


def test_only_first_partition_infix_is_dropped(device_config):
    device_config.host_partition_infix = "p"
    assert resolve_root_block_path("loop-part-1-part-2", device_config) == "/dev/loop1p2"


def test_path_cannot_escape_device_root(device_config):
    assert resolve_root_block_path("../etc/passwd", device_config) == "/dev/passwd"


@pytest.mark.parametrize("dev_name", [
    "/dev/sda1",
    "sda",
    "sda-part-1",
    "/var/lib/direct-csi/devices/sdb-part-3",
    "/var/lib/direct-csi/devices/",
    "../../..",
    "/devices/virtual/block/loop0",
    "",
])
def test_resolution_is_idempotent(device_config, dev_name):
    once = resolve_root_block_path(dev_name, device_config)
    assert resolve_root_block_path(once, device_config) == once


def test_uses_environment_defaults():
    assert resolve_root_block_path("/dev/sda1") == "/dev/sda1"
    assert resolve_root_block_path("sdc-part-2") == "/dev/sdc2"


def test_empty_orchestrator_root_is_ignored(device_config):
    device_config.direct_csi_dev_root = ""
    assert resolve_root_block_path("sda1", device_config) == "/dev/sda1"
    assert resolve_root_block_path("sdb-part-2", device_config) == "/dev/sdb2"


def test_orchestrator_root_without_slash_terminates(device_config):
    device_config.direct_csi_dev_root = "devices"
    assert resolve_root_block_path("devices", device_config) == "/dev/devices"
