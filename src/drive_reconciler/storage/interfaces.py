"""Interfaces of the remote drive record API consumed by the drive cache."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple


class EventType(Enum):
    ADDED = "ADDED"
    MODIFIED = "MODIFIED"
    DELETED = "DELETED"


@dataclass(frozen=True)
class WatchEvent:
    """One add/update/delete notification from the drive watch."""
    type: EventType
    obj: Any
    resource_version: str = ""


class DriveListerWatcher(ABC):
    """List+watch access to drive records of a single node."""

    @abstractmethod
    def list(self, node_id: str) -> Tuple[List[Any], str]:
        """List all drive records of a node.

        Returns:
            Tuple of (records, resource version of the listing)
        """
        pass

    @abstractmethod
    def watch(
        self,
        node_id: str,
        resource_version: str,
        timeout_seconds: Optional[float] = None
    ) -> Iterator[WatchEvent]:
        """Stream changes that happened after resource_version.

        The iterator ends when timeout_seconds elapse. It raises
        ResourceVersionExpiredError when resource_version is too old to resume.
        """
        pass

    def stop(self) -> None:
        """Interrupt a running watch."""
        pass
