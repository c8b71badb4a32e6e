"""
Exceptions raised or collected by the bucket deploy service.
"""
from typing import Optional


class SyncError(Exception):
    """Base class for all sync errors."""
    pass


class SourceNotFound(SyncError):
    """The source directory is missing or could not be read."""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        message = f"Source directory not found: {path}"
        if cause is not None:
            message = f"{message} ({cause})"
        super().__init__(message)


class ObjectPutFailed(SyncError):
    """A single object could not be uploaded."""

    def __init__(self, key: str, cause: BaseException):
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to upload {key}: {cause}")


class ObjectDeleteFailed(SyncError):
    """A single surplus object could not be deleted."""

    def __init__(self, key: str, cause: BaseException):
        self.key = key
        self.cause = cause
        super().__init__(f"Failed to delete {key}: {cause}")


class ObjectListFailed(SyncError):
    """
    The remote bucket could not be listed, so reconciliation was abandoned.

    ``result`` carries the SyncResult gathered so far; its upload counts are
    still valid.
    """

    def __init__(self, cause: BaseException, result=None):
        self.cause = cause
        self.result = result
        super().__init__(f"Failed to list remote objects: {cause}")
