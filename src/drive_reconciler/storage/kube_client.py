"""Kubernetes list+watch access to DirectCSIDrive custom resources."""
import logging
import threading
from typing import Any, Dict, Iterator, List, Optional, Tuple

import kubernetes
from kubernetes import client, config, watch

from ..config import SyncConfig, load_infrastructure_config
from ..errors import DriveParseError, ResourceVersionExpiredError
from ..models.models import DriveRecord
from .interfaces import DriveListerWatcher, EventType, WatchEvent


def load_kube_config() -> None:
    """Load in-cluster config, falling back to the local kubeconfig."""
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()


class KubernetesDriveListerWatcher(DriveListerWatcher):
    """Lists and watches drive records labelled with a node id."""

    def __init__(
        self,
        sync_config: Optional[SyncConfig] = None,
        custom_api: Optional[client.CustomObjectsApi] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.sync_config = sync_config or load_infrastructure_config().sync
        self.logger = logger or logging.getLogger(__name__)
        if custom_api is None:
            load_kube_config()
            custom_api = client.CustomObjectsApi()
        self._custom_api = custom_api
        self._watch: Optional[watch.Watch] = None
        self._watch_lock = threading.Lock()
        self._stopped = threading.Event()

    def _to_records(self, items: List[Dict[str, Any]]) -> List[DriveRecord]:
        records = []
        for item in items:
            try:
                records.append(DriveRecord.from_dict(item))
            except DriveParseError as e:
                self.logger.error(f"Skipping malformed drive object: {e}")
        return records

    def list(self, node_id: str) -> Tuple[List[DriveRecord], str]:
        response = self._custom_api.list_cluster_custom_object(
            group=self.sync_config.group,
            version=self.sync_config.version,
            plural=self.sync_config.plural,
            label_selector=self.sync_config.label_selector(node_id)
        )
        resource_version = (response.get("metadata") or {}).get("resourceVersion") or ""
        return self._to_records(response.get("items") or []), resource_version

    def watch(
        self,
        node_id: str,
        resource_version: str,
        timeout_seconds: Optional[float] = None
    ) -> Iterator[WatchEvent]:
        kwargs = {
            "group": self.sync_config.group,
            "version": self.sync_config.version,
            "plural": self.sync_config.plural,
            "label_selector": self.sync_config.label_selector(node_id),
            "resource_version": resource_version,
        }
        if timeout_seconds:
            kwargs["timeout_seconds"] = max(1, int(timeout_seconds))

        with self._watch_lock:
            if self._stopped.is_set():
                return
            drive_watch = watch.Watch()
            self._watch = drive_watch

        try:
            for event in drive_watch.stream(self._custom_api.list_cluster_custom_object, **kwargs):
                if self._stopped.is_set():
                    break
                parsed = self._parse_event(event)
                if parsed is not None:
                    yield parsed
        except kubernetes.client.rest.ApiException as e:
            if e.status == 410:
                raise ResourceVersionExpiredError(
                    f"resource version {resource_version} expired: {e.reason}"
                )
            raise
        finally:
            with self._watch_lock:
                if self._watch is drive_watch:
                    self._watch = None

    def _parse_event(self, event: Dict[str, Any]) -> Optional[WatchEvent]:
        event_type = event.get("type")
        obj = event.get("object") or {}

        if event_type == "ERROR":
            if obj.get("code") == 410:
                raise ResourceVersionExpiredError(obj.get("message") or "resource version expired")
            raise kubernetes.client.rest.ApiException(
                status=obj.get("code"), reason=obj.get("message")
            )

        try:
            kind = EventType(event_type)
        except ValueError:
            # BOOKMARK and unknown event types carry no drive changes
            return None

        try:
            record = DriveRecord.from_dict(obj)
        except DriveParseError as e:
            metadata = obj.get("metadata") if isinstance(obj, dict) else None
            if kind == EventType.DELETED and isinstance(metadata, dict) and metadata.get("name"):
                # The store keys on metadata.name, so the raw object is enough to delete
                self.logger.warning(f"Deleting drive {metadata['name']} from malformed event: {e}")
                return WatchEvent(
                    type=kind, obj=obj, resource_version=metadata.get("resourceVersion") or ""
                )
            self.logger.error(f"Skipping malformed drive event {event_type}: {e}")
            return None
        return WatchEvent(type=kind, obj=record, resource_version=record.resource_version)

    def stop(self) -> None:
        """Stop the running watch; later watch calls end immediately."""
        with self._watch_lock:
            self._stopped.set()
            if self._watch is not None:
                self._watch.stop()
