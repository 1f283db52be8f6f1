"""Data models for drive records and observed block devices."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from ..device.paths import resolve_root_block_path
from ..errors import DriveParseError


class DriveStatus(Enum):
    AVAILABLE = "Available"
    UNAVAILABLE = "Unavailable"
    IN_USE = "InUse"
    READY = "Ready"
    RELEASED = "Released"
    TERMINATING = "Terminating"
    ERROR = "Error"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str) -> 'DriveStatus':
        """Map a raw status string to a member, UNKNOWN for unrecognized values."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


# Drives in these states are actively used or prepared for use
MANAGED_STATUSES = frozenset({DriveStatus.IN_USE, DriveStatus.READY})


@dataclass(frozen=True)
class RequestedFormat:
    """Format request placed on a drive by the orchestrator"""
    force: bool = False
    purge: bool = False
    filesystem: str = ""
    mount_options: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RequestedFormat':
        return cls(
            force=bool(data.get("force", False)),
            purge=bool(data.get("purge", False)),
            filesystem=data.get("filesystem") or "",
            mount_options=tuple(data.get("mountOptions") or ()),
        )


@dataclass(frozen=True)
class DriveRecord:
    """The cluster's belief about one drive on a specific node.

    Records are immutable snapshots; the drive store replaces them wholesale
    when the watch delivers an update.
    """
    name: str
    node_name: str
    path: str = ""
    resource_version: str = ""
    major_number: int = 0
    minor_number: int = 0
    partition_num: int = 0
    mountpoint: str = ""
    mount_options: Tuple[str, ...] = ()
    total_capacity: int = 0
    read_only: bool = False
    partitioned: bool = False
    filesystem: str = ""
    filesystem_uuid: str = ""
    uevent_fs_uuid: str = ""
    model_number: str = ""
    uevent_serial: str = ""
    serial_number_long: str = ""
    vendor: str = ""
    wwid: str = ""
    dm_name: str = ""
    dm_uuid: str = ""
    md_uuid: str = ""
    part_table_uuid: str = ""
    part_table_type: str = ""
    partition_uuid: str = ""
    pci_path: str = ""
    swap_on: bool = False
    removable: bool = False
    hidden: bool = False
    holders: Tuple[str, ...] = ()
    drive_status: DriveStatus = DriveStatus.AVAILABLE
    raw_drive_status: str = ""
    direct_csi_owned: bool = False
    requested_format: Optional[RequestedFormat] = None

    @property
    def is_managed(self) -> bool:
        return self.drive_status in MANAGED_STATUSES

    @classmethod
    def from_dict(cls, obj: Dict[str, Any]) -> 'DriveRecord':
        """Build a record from a DirectCSIDrive custom object."""
        if not isinstance(obj, dict):
            raise DriveParseError(f"expected a custom object dict, got {type(obj).__name__}")

        metadata = obj.get("metadata") or {}
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}

        name = metadata.get("name")
        if not name:
            raise DriveParseError("custom object has no metadata.name")

        raw_status = status.get("driveStatus") or DriveStatus.AVAILABLE.value

        requested_format = spec.get("requestedFormat")

        try:
            return cls(
                name=name,
                resource_version=metadata.get("resourceVersion") or "",
                node_name=status.get("nodeName") or "",
                path=status.get("path") or "",
                major_number=int(status.get("majorNumber") or 0),
                minor_number=int(status.get("minorNumber") or 0),
                partition_num=int(status.get("partitionNum") or 0),
                mountpoint=status.get("mountpoint") or "",
                mount_options=tuple(status.get("mountOptions") or ()),
                total_capacity=int(status.get("totalCapacity") or 0),
                read_only=bool(status.get("readOnly", False)),
                partitioned=bool(status.get("partitioned", False)),
                filesystem=status.get("filesystem") or "",
                filesystem_uuid=status.get("filesystemUUID") or "",
                uevent_fs_uuid=status.get("ueventFSUUID") or "",
                model_number=status.get("modelNumber") or "",
                uevent_serial=status.get("ueventSerial") or "",
                serial_number_long=status.get("serialNumberLong") or "",
                vendor=status.get("vendor") or "",
                wwid=status.get("wwid") or "",
                dm_name=status.get("dmName") or "",
                dm_uuid=status.get("dmUUID") or "",
                md_uuid=status.get("mdUUID") or "",
                part_table_uuid=status.get("partTableUUID") or "",
                part_table_type=status.get("partTableType") or "",
                partition_uuid=status.get("partitionUUID") or "",
                pci_path=status.get("pciPath") or "",
                swap_on=bool(status.get("swapOn", False)),
                removable=bool(status.get("removable", False)),
                hidden=bool(status.get("hidden", False)),
                holders=tuple(status.get("holders") or ()),
                drive_status=DriveStatus.parse(raw_status),
                raw_drive_status=str(raw_status),
                direct_csi_owned=bool(spec.get("directCSIOwned", False)),
                requested_format=(
                    RequestedFormat.from_dict(requested_format)
                    if requested_format is not None else None
                ),
            )
        except (TypeError, ValueError) as e:
            raise DriveParseError(f"drive {name} has malformed status: {e}")


@dataclass(frozen=True)
class DeviceDescriptor:
    """The kernel's current view of one block device.

    Built fresh for every uevent or scan by the udev layer.
    """
    name: str
    major: int = 0
    minor: int = 0
    partition: int = 0
    first_mount_point: str = ""
    first_mount_options: Tuple[str, ...] = ()
    size: int = 0
    read_only: bool = False
    partitioned: bool = False
    fs_type: str = ""
    fs_uuid: str = ""
    uevent_fs_uuid: str = ""
    model: str = ""
    uevent_serial: str = ""
    serial_long: str = ""
    vendor: str = ""
    wwid: str = ""
    dm_name: str = ""
    dm_uuid: str = ""
    md_uuid: str = ""
    pt_uuid: str = ""
    pt_type: str = ""
    part_uuid: str = ""
    pci_path: str = ""
    swap_on: bool = False
    removable: bool = False
    hidden: bool = False
    holders: Tuple[str, ...] = field(default_factory=tuple)

    def dev_path(self) -> str:
        """Canonical host block device path."""
        return resolve_root_block_path(self.name)
