"""Queries over the locally synchronized drive cache."""
import logging
import threading
from typing import List, Optional, Tuple

from ..config import load_infrastructure_config
from ..errors import NotDriveRecordError
from ..models.models import DriveRecord
from .drive_store import DriveStore, DriveStoreView
from .interfaces import DriveListerWatcher
from .kube_client import KubernetesDriveListerWatcher
from .sync_manager import DriveSynchronizer


class DriveIndex:
    """Read-only classification of the cached drive records of one node.

    Results are snapshots of the cache at call time.
    """

    def __init__(
        self,
        store: DriveStoreView,
        node_id: str,
        synchronizer: Optional[DriveSynchronizer] = None
    ):
        self._store = store
        self.node_id = node_id
        self.synchronizer = synchronizer

    def has_synced(self) -> bool:
        return self.synchronizer is not None and self.synchronizer.has_synced()

    def _local_drives(self) -> List[DriveRecord]:
        drives = []
        for obj in self._store.list():
            if not isinstance(obj, DriveRecord):
                raise NotDriveRecordError(obj)
            if obj.node_name != self.node_id:
                continue
            drives.append(obj)
        return drives

    def filter_drives_by_uevent_fsuuid(self, fsuuid: str) -> List[DriveRecord]:
        """Drives of this node whose udev filesystem UUID equals fsuuid.

        Raises:
            NotDriveRecordError: If the store holds a foreign object
        """
        return [drive for drive in self._local_drives() if drive.uevent_fs_uuid == fsuuid]

    def list_drives(self) -> Tuple[List[DriveRecord], List[DriveRecord]]:
        """Split the drives of this node into managed and non-managed ones.

        Managed drives are in use or ready for use; every other status is
        non-managed.

        Returns:
            Tuple of (managed, non_managed)

        Raises:
            NotDriveRecordError: If the store holds a foreign object
        """
        managed, non_managed = [], []
        for drive in self._local_drives():
            if drive.is_managed:
                managed.append(drive)
            else:
                non_managed.append(drive)
        return managed, non_managed


def open_drive_index(
    node_id: str,
    resync_period: Optional[float] = None,
    stop_event: Optional[threading.Event] = None,
    lister_watcher: Optional[DriveListerWatcher] = None,
    logger: Optional[logging.Logger] = None,
    timeout: Optional[float] = None
) -> DriveIndex:
    """Start syncing the drives of a node and wait for the first listing.

    The index is returned even when the sync did not complete; callers that
    need a complete view check DriveIndex.has_synced().

    Args:
        node_id: Node whose drives are indexed
        resync_period: Seconds between full listings
        stop_event: Cancellation signal for the wait and the sync thread
        lister_watcher: Drive API access, Kubernetes by default
        logger: Logger for lifecycle messages
        timeout: Upper bound for the initial wait, unbounded by default
    """
    logger = logger or logging.getLogger(__name__)
    sync_config = load_infrastructure_config().sync
    if lister_watcher is None:
        lister_watcher = KubernetesDriveListerWatcher(sync_config=sync_config, logger=logger)

    store = DriveStore()
    synchronizer = DriveSynchronizer(
        store,
        lister_watcher,
        node_id,
        resync_period=resync_period if resync_period is not None else sync_config.resync_period,
        stop_event=stop_event,
        retry_delays=sync_config.retry_delays,
        logger=logger
    )
    synchronizer.start()

    if synchronizer.wait_for_sync(timeout):
        logger.info("indexer successfully synced")
    else:
        logger.info("indexer can't be synced")

    return DriveIndex(store.view(), node_id, synchronizer)
