"""
Exceptions raised while reading or writing board snapshots.
"""


class SnapshotError(Exception):
    """Base class for snapshot failures."""


class SnapshotIOError(SnapshotError):
    """The snapshot file could not be read or written."""


class SnapshotFormatError(SnapshotError, ValueError):
    """The snapshot document is not valid JSON or does not describe a board."""
