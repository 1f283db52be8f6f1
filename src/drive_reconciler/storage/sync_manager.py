"""Module for keeping the local drive cache in sync with the cluster."""
import threading
import logging
from typing import List, Optional

from ..config import base_config
from ..errors import ResourceVersionExpiredError
from ..monitoring import metrics
from .drive_store import DriveStore
from .interfaces import DriveListerWatcher, EventType, WatchEvent


class DriveSynchronizer:
    """Runs list+watch against the drive API and applies results to a DriveStore.

    A background thread lists the node's drives, replaces the store content
    with the listing and then applies watch events in delivery order. The
    watch is bounded by the resync period; when it ends the thread lists
    again, which heals events missed during disconnects.
    """

    def __init__(
        self,
        store: DriveStore,
        lister_watcher: DriveListerWatcher,
        node_id: str,
        resync_period: Optional[float] = None,
        stop_event: Optional[threading.Event] = None,
        retry_delays: Optional[List[float]] = None,
        logger: Optional[logging.Logger] = None,
        metrics_enabled: Optional[bool] = None,
        relist_delay: float = 1.0
    ):
        """Initialize the synchronizer.

        Args:
            store: Store receiving the drive records
            lister_watcher: Access to the remote drive API
            node_id: Node whose drives are synchronized
            resync_period: Seconds between full listings
            stop_event: Cancellation signal, may be shared with the caller
            retry_delays: Backoff delays after failed list/watch attempts
            logger: Logger for lifecycle messages
            metrics_enabled: Export Prometheus metrics
            relist_delay: Pause between a finished watch and the next listing
        """
        self._store = store
        self._lister_watcher = lister_watcher
        self.node_id = node_id
        self.resync_period = resync_period if resync_period is not None else base_config.RESYNC_PERIOD
        self._stop_event = stop_event or threading.Event()
        self._retry_delays = retry_delays or list(base_config.WATCH_RETRY_DELAYS)
        self.logger = logger or logging.getLogger(__name__)
        if metrics_enabled is None:
            metrics_enabled = base_config.METRICS_ENABLED
        self.metrics_enabled = metrics_enabled
        self.relist_delay = relist_delay

        self._initial_resource_version = ""
        self._resource_version = self._initial_resource_version
        self._version_lock = threading.Lock()
        self._synced = threading.Event()
        self._sync_thread: Optional[threading.Thread] = None

    @property
    def stop_event(self) -> threading.Event:
        return self._stop_event

    def start(self):
        """Start the background sync thread."""
        if self._sync_thread is not None:
            return

        self._sync_thread = threading.Thread(
            target=self._sync_loop, name=f"drive-sync-{self.node_id}"
        )
        self._sync_thread.daemon = True
        self._sync_thread.start()
        self.logger.info(f"Drive synchronizer started for node {self.node_id}")

    def stop(self, timeout: Optional[float] = 5.0):
        """Stop the background sync thread.

        The store keeps the last known drive records.
        """
        if self._sync_thread is None:
            return

        self._stop_event.set()
        self._lister_watcher.stop()
        self._sync_thread.join(timeout)
        if self._sync_thread.is_alive():
            self.logger.warning(f"Drive synchronizer for node {self.node_id} did not stop in time")
        self._sync_thread = None
        self.logger.info(f"Drive synchronizer stopped for node {self.node_id}")

    def is_running(self) -> bool:
        return self._sync_thread is not None and self._sync_thread.is_alive()

    def last_sync_resource_version(self) -> str:
        with self._version_lock:
            return self._resource_version

    def has_synced(self) -> bool:
        """True once a full listing has been applied; stays true afterwards."""
        return self._synced.is_set()

    def wait_for_sync(self, timeout: Optional[float] = None, poll_interval: float = 0.1) -> bool:
        """Block until the first listing is applied.

        Returns early, without raising, when the stop event fires or the
        timeout elapses.

        Returns:
            Whether the cache is synced
        """
        remaining = timeout
        while not self._synced.is_set():
            if self._stop_event.is_set():
                break
            wait = poll_interval if remaining is None else min(poll_interval, remaining)
            if wait <= 0:
                break
            self._synced.wait(wait)
            if remaining is not None:
                remaining -= wait
        return self._synced.is_set()

    def _set_resource_version(self, resource_version: str):
        with self._version_lock:
            self._resource_version = resource_version
        if resource_version != self._initial_resource_version and not self._synced.is_set():
            self._synced.set()
            if self.metrics_enabled:
                metrics.DRIVE_CACHE_SYNCED.labels(node_id=self.node_id).set(1)

    def _sync_loop(self):
        """Main sync loop."""
        failures = 0
        while not self._stop_event.is_set():
            try:
                self._list_and_watch()
                failures = 0
                self._stop_event.wait(self.relist_delay)
            except ResourceVersionExpiredError as e:
                self.logger.info(f"Drive watch expired, relisting: {e}")
                failures = 0
            except Exception as e:
                self.logger.error(f"Error in drive sync loop: {e}")
                if self.metrics_enabled:
                    metrics.DRIVE_CACHE_WATCH_ERRORS.labels(node_id=self.node_id).inc()
                delay = self._retry_delays[min(failures, len(self._retry_delays) - 1)]
                failures += 1
                self._stop_event.wait(delay)

    def _list_and_watch(self):
        records, resource_version = self._lister_watcher.list(self.node_id)
        if self._stop_event.is_set():
            return

        self._store.replace(records)
        self._set_resource_version(resource_version)
        self.logger.debug(
            f"Listed {len(records)} drives for node {self.node_id} at version {resource_version}"
        )
        if self.metrics_enabled:
            metrics.DRIVE_CACHE_RELISTS.labels(node_id=self.node_id).inc()
            metrics.DRIVE_CACHE_SIZE.labels(node_id=self.node_id).set(len(self._store))

        for event in self._lister_watcher.watch(
            self.node_id, resource_version, timeout_seconds=self.resync_period
        ):
            if self._stop_event.is_set():
                break
            self._apply(event)

    def _apply(self, event: WatchEvent):
        if event.type == EventType.DELETED:
            self._store.delete(event.obj)
        else:
            self._store.update(event.obj)

        if event.resource_version:
            self._set_resource_version(event.resource_version)
        if self.metrics_enabled:
            metrics.DRIVE_CACHE_EVENTS.labels(event_type=event.type.value, node_id=self.node_id).inc()
            metrics.DRIVE_CACHE_SIZE.labels(node_id=self.node_id).set(len(self._store))
