"""Finding the drive record of an observed device and detecting drift."""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..models.models import DeviceDescriptor, DriveRecord
from ..storage.drive_index import DriveIndex
from .comparator import DriveValidator, ValidationResult


@dataclass
class MatchResult:
    """The drive record matching a device.

    drifted is set when the record no longer describes the device's mount,
    system or filesystem state and needs an update.
    """
    drive: DriveRecord
    drifted: bool
    failed_checks: List[ValidationResult] = field(default_factory=list)


class DriveMatcher:
    def __init__(
        self,
        index: DriveIndex,
        validator: Optional[DriveValidator] = None,
        logger: Optional[logging.Logger] = None
    ):
        self.index = index
        self.logger = logger or logging.getLogger(__name__)
        self.validator = validator or DriveValidator(logger=self.logger)

    def candidates(self, device: DeviceDescriptor) -> List[DriveRecord]:
        """Drives that may describe the device, narrowest lookup first."""
        if device.uevent_fs_uuid:
            drives = self.index.filter_drives_by_uevent_fsuuid(device.uevent_fs_uuid)
            if drives:
                return drives
        managed, non_managed = self.index.list_drives()
        return managed + non_managed

    def match(self, device: DeviceDescriptor) -> Optional[MatchResult]:
        """Find the drive whose udev identity matches the device.

        Returns:
            MatchResult, or None when no cached drive describes the device
        """
        if not self.index.has_synced():
            self.logger.warning(f"[{device.name}] drive index is not synced, match may be stale")

        candidates = self.candidates(device)
        for drive in candidates:
            if not self.validator.validate_udev_info(device, drive):
                continue

            failed = [
                result for result in (
                    self.validator.validate_mount_info(device, drive),
                    self.validator.validate_sys_info(device, drive),
                    self.validator.validate_dev_info(device, drive),
                )
                if not result
            ]
            return MatchResult(drive=drive, drifted=bool(failed), failed_checks=failed)

        self.logger.debug(f"[{device.name}] no matching drive among {len(candidates)} candidates")
        return None
