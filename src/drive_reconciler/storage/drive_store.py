"""Thread-safe in-memory store of drive records fed by the drive watch."""
import threading
from typing import Any, Callable, Dict, Iterable, List, Optional


def drive_key(obj: Any) -> str:
    """Store key of a drive record; drives are cluster scoped so the name suffices."""
    name = getattr(obj, "name", None)
    if name is None and isinstance(obj, dict):
        name = (obj.get("metadata") or {}).get("name")
    if not name:
        raise KeyError(f"cannot derive a store key for {type(obj).__name__}")
    return name


class DriveStore:
    """Keyed store with a single writer and many readers.

    The synchronizer is the only writer. Readers get a DriveStoreView, which
    hands out list snapshots and never exposes the mutating methods.
    """

    def __init__(self, key_func: Callable[[Any], str] = drive_key):
        self._key_func = key_func
        self._items: Dict[str, Any] = {}
        self._lock = threading.RLock()

    def add(self, obj: Any) -> None:
        key = self._key_func(obj)
        with self._lock:
            self._items[key] = obj

    def update(self, obj: Any) -> None:
        self.add(obj)

    def delete(self, obj: Any) -> bool:
        """Remove an entry.

        Returns:
            True if the entry was present
        """
        key = self._key_func(obj)
        with self._lock:
            return self._items.pop(key, None) is not None

    def replace(self, objects: Iterable[Any]) -> None:
        """Swap the whole content for a fresh listing."""
        items = {self._key_func(obj): obj for obj in objects}
        with self._lock:
            self._items = items

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            return self._items.get(key)

    def list(self) -> List[Any]:
        with self._lock:
            return list(self._items.values())

    def list_keys(self) -> List[str]:
        with self._lock:
            return list(self._items.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def view(self) -> 'DriveStoreView':
        return DriveStoreView(self)


class DriveStoreView:
    """Read-only access to a DriveStore."""

    def __init__(self, store: DriveStore):
        self._store = store

    def get(self, key: str) -> Optional[Any]:
        return self._store.get(key)

    def list(self) -> List[Any]:
        return self._store.list()

    def list_keys(self) -> List[str]:
        return self._store.list_keys()

    def __len__(self) -> int:
        return len(self._store)
