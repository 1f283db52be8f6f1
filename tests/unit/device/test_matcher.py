"""Unit tests for matching devices to drive records."""
from unittest.mock import MagicMock

import pytest

from common.fakes import make_device, make_drive
from drive_reconciler.device.comparator import DriveValidator
from drive_reconciler.device.matcher import DriveMatcher
from drive_reconciler.models import DriveStatus
from drive_reconciler.storage.drive_index import DriveIndex
from drive_reconciler.storage.drive_store import DriveStore


@pytest.fixture
def store():
    return DriveStore()


@pytest.fixture
def matcher(store, node_id):
    synchronizer = MagicMock()
    synchronizer.has_synced.return_value = True
    index = DriveIndex(store.view(), node_id, synchronizer)
    return DriveMatcher(index, validator=DriveValidator(metrics_enabled=False))


class TestDriveMatcher:
    def test_matching_drive_without_drift(self, store, matcher, device):
        store.add(make_drive())

        result = matcher.match(device)

        assert result is not None
        assert result.drive.name == "drive-sdb1"
        assert result.drifted is False
        assert result.failed_checks == []

    def test_drift_in_mount_state(self, store, matcher):
        store.add(make_drive())

        result = matcher.match(make_device(first_mount_point="", first_mount_options=()))

        assert result.drifted is True
        assert [r.check for r in result.failed_checks] == ["mount"]

    def test_drift_in_capacity_and_swap(self, store, matcher):
        store.add(make_drive())

        result = matcher.match(make_device(size=1, swap_on=True))

        assert result.drifted is True
        assert [r.check for r in result.failed_checks] == ["sys", "devinfo"]

    def test_picks_candidate_with_matching_identity(self, store, matcher):
        store.add(make_drive(name="other", path="/dev/sdc1", minor_number=33))
        store.add(make_drive(name="right"))

        result = matcher.match(make_device())
        assert result.drive.name == "right"

    def test_falls_back_to_all_drives_without_fs_uuid(self, store, matcher):
        store.add(make_drive(name="fresh", filesystem="", filesystem_uuid="", uevent_fs_uuid="",
                             drive_status=DriveStatus.AVAILABLE))

        device = make_device(fs_type="", fs_uuid="", uevent_fs_uuid="")
        result = matcher.match(device)
        assert result.drive.name == "fresh"

    def test_falls_back_when_fs_uuid_unknown_to_cache(self, store, matcher):
        store.add(make_drive(uevent_fs_uuid="old-uuid", filesystem_uuid="old-uuid"))

        result = matcher.match(make_device(uevent_fs_uuid="", fs_uuid="old-uuid"))
        assert result.drive.name == "drive-sdb1"

    def test_no_match(self, store, matcher):
        store.add(make_drive(node_name="other-node"))
        assert matcher.match(make_device()) is None

    def test_warns_when_index_not_synced(self, store, node_id, device, caplog):
        store.add(make_drive())
        matcher = DriveMatcher(DriveIndex(store.view(), node_id), validator=DriveValidator(metrics_enabled=False))

        assert matcher.match(device) is not None
        assert "drive index is not synced" in caplog.text
