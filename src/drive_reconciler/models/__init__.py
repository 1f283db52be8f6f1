"""Data models for the drive reconciler."""

from .models import (
    MANAGED_STATUSES,
    DeviceDescriptor,
    DriveRecord,
    DriveStatus,
    RequestedFormat,
)

__all__ = [
    "MANAGED_STATUSES",
    "DeviceDescriptor",
    "DriveRecord",
    "DriveStatus",
    "RequestedFormat",
]
