"""Unit tests for exported Prometheus metrics."""
from prometheus_client import REGISTRY

from common.fakes import FakeDriveListerWatcher, make_device, make_drive, wait_until
from drive_reconciler.device.comparator import DriveValidator
from drive_reconciler.storage.drive_store import DriveStore
from drive_reconciler.storage.interfaces import EventType
from drive_reconciler.storage.sync_manager import DriveSynchronizer


def sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_mismatch_counted_per_field():
    labels = {"check": "udev", "field": "vendor"}
    before = sample("drive_validation_mismatches_total", labels)

    DriveValidator(metrics_enabled=True).validate_udev_info(make_device(vendor="HGST"), make_drive())

    assert sample("drive_validation_mismatches_total", labels) == before + 1


def test_tolerated_empty_field_counted():
    labels = {"field": "filesystem"}
    before = sample("drive_validation_tolerated_empty_total", labels)

    DriveValidator(metrics_enabled=True).validate_udev_info(make_device(fs_type=""), make_drive())

    assert sample("drive_validation_tolerated_empty_total", labels) == before + 1


def test_sync_metrics():
    node_id = "metrics-node"
    lister_watcher = FakeDriveListerWatcher(records=[make_drive(name="a", node_name=node_id)])
    synchronizer = DriveSynchronizer(
        DriveStore(), lister_watcher, node_id, resync_period=60, metrics_enabled=True
    )
    synchronizer.start()
    try:
        assert synchronizer.wait_for_sync(timeout=2.0)
        lister_watcher.push(EventType.ADDED, make_drive(name="b", node_name=node_id), "2")
        assert wait_until(lambda: sample("drive_cache_size", {"node_id": node_id}) == 2.0)

        assert sample("drive_cache_synced", {"node_id": node_id}) == 1.0
        assert sample("drive_cache_relists_total", {"node_id": node_id}) >= 1.0
        assert sample("drive_cache_events_total", {"event_type": "ADDED", "node_id": node_id}) == 1.0
    finally:
        synchronizer.stop()
