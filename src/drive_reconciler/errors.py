"""Error types for the drive reconciler."""


class DriveIndexError(Exception):
    """Base class for drive index errors."""


class NotDriveRecordError(DriveIndexError, TypeError):
    """Raised when the drive store yields an object that is not a DriveRecord."""

    def __init__(self, obj):
        super().__init__(f"not a directcsidrive object: {type(obj).__name__}")
        self.obj = obj


class DriveParseError(DriveIndexError, ValueError):
    """Raised when a custom object cannot be converted into a DriveRecord."""


class ResourceVersionExpiredError(DriveIndexError):
    """Raised by a watch when its starting resource version is too old."""
