"""
Daybook exception hierarchy.

All daybook exceptions inherit from DaybookError, making it easy for consumers
to catch library-level errors while still distinguishing specific failure modes.
Storage backends raise these; the entry store catches them at its public
boundary and degrades to empty reads or ``False`` writes.
"""


class DaybookError(Exception):
    """Base exception class for all daybook errors."""


class ConfigurationError(DaybookError):
    """Raised for configuration errors (missing keys, invalid values)."""


class StorageError(DaybookError):
    """Base exception for storage medium errors."""


class StorageUnavailableError(StorageError):
    """Raised when the storage medium cannot be read or written at all."""


class StorageQuotaError(StorageError):
    """Raised when a write would exceed the storage quota."""


class StoragePermissionError(StorageError):
    """Raised when a storage operation is not permitted."""


class MalformedSnapshotError(DaybookError):
    """Raised when a stored or imported payload is not valid JSON of the expected shape."""
