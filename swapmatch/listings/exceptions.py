"""Custom exceptions for listing snapshots."""


class SnapshotError(Exception):
    """A listing snapshot could not be read or has the wrong shape.

    Raised for unreadable files and documents whose top level is not a mapping.
    Individual malformed postings are skipped rather than raising.
    """

    def __init__(self, message: str, path: str = "") -> None:
        """Initialize snapshot error.

        Args:
            message: Human-readable error message
            path: Snapshot file involved, if any
        """
        super().__init__(message)
        self.path = path
