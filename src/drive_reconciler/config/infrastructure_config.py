"""Infrastructure configuration management."""

import os
from dataclasses import dataclass, field
from typing import List

from . import base_config


@dataclass
class NodeConfig:
    node_id: str


@dataclass
class DeviceConfig:
    host_dev_root: str
    direct_csi_dev_root: str
    direct_csi_partition_infix: str
    host_partition_infix: str


@dataclass
class SyncConfig:
    resync_period: float
    group: str
    version: str
    plural: str
    node_label_key: str
    retry_delays: List[float] = field(default_factory=lambda: list(base_config.WATCH_RETRY_DELAYS))

    def label_selector(self, node_id: str) -> str:
        """Label selector scoping drive records to a single node."""
        return f"{self.node_label_key}={node_id}"


@dataclass
class InfrastructureConfig:
    node: NodeConfig
    device: DeviceConfig
    sync: SyncConfig
    metrics_enabled: bool
    debug_mode: bool


def _get_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value == '':
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


def load_infrastructure_config() -> InfrastructureConfig:
    """Load infrastructure configuration from environment variables."""
    node_config = NodeConfig(
        node_id=os.getenv('NODE_ID', base_config.NODE_ID)
    )

    device_config = DeviceConfig(
        host_dev_root=os.getenv('HOST_DEV_ROOT', base_config.HOST_DEV_ROOT),
        direct_csi_dev_root=os.getenv('DIRECT_CSI_DEV_ROOT', base_config.DIRECT_CSI_DEV_ROOT),
        direct_csi_partition_infix=os.getenv(
            'DIRECT_CSI_PARTITION_INFIX', base_config.DIRECT_CSI_PARTITION_INFIX
        ),
        host_partition_infix=os.getenv('HOST_PARTITION_INFIX', base_config.HOST_PARTITION_INFIX)
    )

    sync_config = SyncConfig(
        resync_period=_get_float('RESYNC_PERIOD', base_config.RESYNC_PERIOD),
        group=os.getenv('DRIVE_GROUP', base_config.DRIVE_GROUP),
        version=os.getenv('DRIVE_VERSION', base_config.DRIVE_VERSION),
        plural=os.getenv('DRIVE_PLURAL', base_config.DRIVE_PLURAL),
        node_label_key=os.getenv('NODE_LABEL_KEY', base_config.NODE_LABEL_KEY)
    )

    return InfrastructureConfig(
        node=node_config,
        device=device_config,
        sync=sync_config,
        metrics_enabled=os.getenv('METRICS_ENABLED', 'true').lower() == 'true',
        debug_mode=os.getenv('DEBUG', 'false').lower() == 'true'
    )
