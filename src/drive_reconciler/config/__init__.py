"""Configuration for the drive reconciler."""

from .infrastructure_config import (
    DeviceConfig,
    InfrastructureConfig,
    NodeConfig,
    SyncConfig,
    load_infrastructure_config,
)

__all__ = [
    "DeviceConfig",
    "InfrastructureConfig",
    "NodeConfig",
    "SyncConfig",
    "load_infrastructure_config",
]
