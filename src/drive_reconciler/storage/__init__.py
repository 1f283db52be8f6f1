"""Local drive cache and its synchronization with the cluster."""

from .drive_index import DriveIndex, open_drive_index
from .drive_store import DriveStore, DriveStoreView
from .interfaces import DriveListerWatcher, EventType, WatchEvent
from .sync_manager import DriveSynchronizer

__all__ = [
    "DriveIndex",
    "DriveListerWatcher",
    "DriveStore",
    "DriveStoreView",
    "DriveSynchronizer",
    "EventType",
    "WatchEvent",
    "open_drive_index",
]
