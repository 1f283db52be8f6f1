"""Reconciles observed block devices with cached DirectCSIDrive records."""

from .device.comparator import (
    DriveValidator,
    ValidationResult,
    is_format_requested,
    validate_dev_info,
    validate_mount_info,
    validate_sys_info,
    validate_udev_info,
)
from .device.matcher import DriveMatcher, MatchResult
from .device.paths import resolve_root_block_path
from .errors import DriveIndexError, DriveParseError, NotDriveRecordError
from .models import DeviceDescriptor, DriveRecord, DriveStatus, RequestedFormat
from .storage import DriveIndex, DriveSynchronizer, open_drive_index

__version__ = "0.1.0"

__all__ = [
    "DeviceDescriptor",
    "DriveIndex",
    "DriveIndexError",
    "DriveMatcher",
    "DriveParseError",
    "DriveRecord",
    "DriveStatus",
    "DriveSynchronizer",
    "DriveValidator",
    "MatchResult",
    "NotDriveRecordError",
    "RequestedFormat",
    "ValidationResult",
    "is_format_requested",
    "open_drive_index",
    "resolve_root_block_path",
    "validate_dev_info",
    "validate_mount_info",
    "validate_sys_info",
    "validate_udev_info",
]
