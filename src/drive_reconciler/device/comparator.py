"""Comparison of observed block devices against cached drive records.

Every check is a table of field comparisons evaluated in order. The first
failing field ends the check. A drive that does not match is an ordinary
outcome, so checks return a ValidationResult instead of raising.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Sequence

from ..config import base_config
from ..models.models import DeviceDescriptor, DriveRecord, DriveStatus
from ..monitoring import metrics


class Policy(Enum):
    """How a single field is compared."""
    STRICT = "strict"
    EMPTY_TOLERANT = "empty_tolerant"  # empty observed value is not a conflict
    WWID = "wwid"
    UNORDERED = "unordered"


@dataclass(frozen=True)
class FieldCheck:
    name: str
    expected: Callable[[DriveRecord], Any]
    observed: Callable[[DeviceDescriptor], Any]
    policy: Policy = Policy.STRICT
    udev_key: str = ""


@dataclass(frozen=True)
class FieldMismatch:
    field: str
    expected: Any
    observed: Any


@dataclass
class ValidationResult:
    """Outcome of one check."""
    check: str
    matched: bool = True
    mismatches: List[FieldMismatch] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.matched


def wwid_without_extension(wwid: str) -> str:
    """Strip a ``naa.``-style extension from a WWID."""
    parts = wwid.split(".", 1)
    if len(parts) == 2:
        return parts[1]
    return wwid


def wwid_matches(expected: str, observed: str) -> bool:
    if expected == observed:
        return True
    return wwid_without_extension(expected) == _strip_prefix(observed, "0x")


def _strip_prefix(value: str, prefix: str) -> str:
    if value.startswith(prefix):
        return value[len(prefix):]
    return value


MOUNT_FIELDS = (
    FieldCheck("mountpoint", lambda d: d.mountpoint, lambda v: v.first_mount_point),
    FieldCheck("mountoptions", lambda d: d.mount_options, lambda v: v.first_mount_options,
               Policy.UNORDERED),
)

UDEV_FIELDS = (
    FieldCheck("path", lambda d: d.path, lambda v: v.dev_path()),
    FieldCheck("major number", lambda d: d.major_number, lambda v: v.major),
    FieldCheck("minor number", lambda d: d.minor_number, lambda v: v.minor),
    FieldCheck("partitionnum", lambda d: d.partition_num, lambda v: v.partition),
    FieldCheck("wwid", lambda d: d.wwid, lambda v: v.wwid, Policy.WWID),
    FieldCheck("modelnumber", lambda d: d.model_number, lambda v: v.model),
    FieldCheck("ueventserial", lambda d: d.uevent_serial, lambda v: v.uevent_serial),
    FieldCheck("serialnumberlong", lambda d: d.serial_number_long, lambda v: v.serial_long),
    FieldCheck("vendor", lambda d: d.vendor, lambda v: v.vendor),
    FieldCheck("dmname", lambda d: d.dm_name, lambda v: v.dm_name),
    FieldCheck("dmuuid", lambda d: d.dm_uuid, lambda v: v.dm_uuid),
    FieldCheck("mduuid", lambda d: d.md_uuid, lambda v: v.md_uuid),
    FieldCheck("parttableuuid", lambda d: d.part_table_uuid, lambda v: v.pt_uuid),
    FieldCheck("parttabletype", lambda d: d.part_table_type, lambda v: v.pt_type),
    FieldCheck("partitionuuid", lambda d: d.partition_uuid, lambda v: v.part_uuid),
    FieldCheck("filesystem", lambda d: d.filesystem, lambda v: v.fs_type,
               Policy.EMPTY_TOLERANT, udev_key="ID_FS_TYPE"),
    FieldCheck("ueventfsuuid", lambda d: d.uevent_fs_uuid, lambda v: v.uevent_fs_uuid,
               Policy.EMPTY_TOLERANT, udev_key="ID_FS_UUID"),
    FieldCheck("pcipath", lambda d: d.pci_path, lambda v: v.pci_path),
)

SYS_FIELDS = (
    FieldCheck("readonly", lambda d: d.read_only, lambda v: v.read_only),
    FieldCheck("size", lambda d: d.total_capacity, lambda v: v.size),
    FieldCheck("partitioned", lambda d: d.partitioned, lambda v: v.partitioned),
)

# Known but not enforced yet; append to SYS_FIELDS to enforce.
DEFERRED_SYS_FIELDS = (
    FieldCheck("removable", lambda d: d.removable, lambda v: v.removable),
    FieldCheck("hidden", lambda d: d.hidden, lambda v: v.hidden),
    FieldCheck("holders", lambda d: len(d.holders), lambda v: len(v.holders)),
)

DEV_INFO_FIELDS = (
    FieldCheck("fsuuid", lambda d: d.filesystem_uuid, lambda v: v.fs_uuid),
    FieldCheck("swapon", lambda d: d.swap_on, lambda v: v.swap_on),
)


class DriveValidator:
    """Validates a device against a drive record across independent dimensions."""

    def __init__(self, logger: Optional[logging.Logger] = None, metrics_enabled: Optional[bool] = None):
        self.logger = logger or logging.getLogger(__name__)
        if metrics_enabled is None:
            metrics_enabled = base_config.METRICS_ENABLED
        self.metrics_enabled = metrics_enabled

    def validate_mount_info(self, device: DeviceDescriptor, drive: DriveRecord) -> ValidationResult:
        """Check the primary mount point and its options (in any order)."""
        return self.evaluate("mount", MOUNT_FIELDS, device, drive)

    def validate_udev_info(self, device: DeviceDescriptor, drive: DriveRecord) -> ValidationResult:
        """Check the udev identity of the device.

        Filesystem type and uevent filesystem UUID are only compared when udev
        reported a value for them; an empty value is logged as a warning.
        """
        return self.evaluate("udev", UDEV_FIELDS, device, drive)

    def validate_sys_info(self, device: DeviceDescriptor, drive: DriveRecord) -> ValidationResult:
        """Check read-only flag, capacity and partitioned flag."""
        return self.evaluate("sys", SYS_FIELDS, device, drive)

    def validate_dev_info(self, device: DeviceDescriptor, drive: DriveRecord) -> ValidationResult:
        """Check the probed filesystem UUID and swap state."""
        return self.evaluate("devinfo", DEV_INFO_FIELDS, device, drive)

    def evaluate(
        self,
        check: str,
        fields: Sequence[FieldCheck],
        device: DeviceDescriptor,
        drive: DriveRecord
    ) -> ValidationResult:
        result = ValidationResult(check=check)
        for field_check in fields:
            expected = field_check.expected(drive)
            observed = field_check.observed(device)

            if self._equal(field_check.policy, expected, observed):
                continue

            if field_check.policy == Policy.EMPTY_TOLERANT and not observed:
                message = (
                    f"[{device.name}] {field_check.udev_key} not found in "
                    f"/run/udev/data/b{device.major}:{device.minor}. "
                    f"Please refer {base_config.TROUBLESHOOTING_URL}"
                )
                self.logger.warning(message)
                result.warnings.append(message)
                if self.metrics_enabled:
                    metrics.DRIVE_VALIDATION_TOLERATED.labels(field=field_check.name).inc()
                continue

            self.logger.debug(
                f"[{device.name}] {field_check.name} mismatch: {expected} -> {observed}"
            )
            result.matched = False
            result.mismatches.append(FieldMismatch(field_check.name, expected, observed))
            if self.metrics_enabled:
                metrics.DRIVE_VALIDATION_MISMATCHES.labels(check=check, field=field_check.name).inc()
            break

        return result

    @staticmethod
    def _equal(policy: Policy, expected: Any, observed: Any) -> bool:
        if policy == Policy.WWID:
            return wwid_matches(expected, observed)
        if policy == Policy.UNORDERED:
            return sorted(expected or ()) == sorted(observed or ())
        return expected == observed


_default_validator = DriveValidator()


def validate_mount_info(device: DeviceDescriptor, drive: DriveRecord) -> ValidationResult:
    return _default_validator.validate_mount_info(device, drive)


def validate_udev_info(device: DeviceDescriptor, drive: DriveRecord) -> ValidationResult:
    return _default_validator.validate_udev_info(device, drive)


def validate_sys_info(device: DeviceDescriptor, drive: DriveRecord) -> ValidationResult:
    return _default_validator.validate_sys_info(device, drive)


def validate_dev_info(device: DeviceDescriptor, drive: DriveRecord) -> ValidationResult:
    return _default_validator.validate_dev_info(device, drive)


def is_format_requested(drive: DriveRecord) -> bool:
    """Whether the orchestrator asked for this available drive to be formatted."""
    return (
        drive.direct_csi_owned
        and drive.requested_format is not None
        and drive.drive_status == DriveStatus.AVAILABLE
    )


def get_device_names(devices: Iterable[DeviceDescriptor]) -> str:
    return ", ".join(device.name for device in devices)
