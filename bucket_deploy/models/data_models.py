"""
Core data models for the bucket deploy service.
"""
import os
from dataclasses import dataclass, field
from typing import Dict, Any, List, Optional, Set, Tuple

from .errors import ObjectPutFailed, ObjectDeleteFailed


def derive_object_key(source_dir: str, path: str, key_prefix: str = '') -> str:
    """
    Build the object key for a local file.

    The source directory and the separator after it are stripped, path
    separators become ``/`` and the optional prefix is prepended.
    """
    relative = os.path.relpath(path, source_dir)
    if relative == os.curdir or relative.startswith(os.pardir + os.sep) or relative == os.pardir:
        raise ValueError(f"{path} is not inside {source_dir}")
    key = relative.replace(os.sep, '/')
    prefix = key_prefix.strip('/')
    if prefix:
        return f"{prefix}/{key}"
    return key


@dataclass(frozen=True)
class LocalFileSet:
    """Snapshot of the files found under a source directory at sync start."""
    source_dir: str
    paths: Tuple[str, ...]
    key_prefix: str = ''

    def __len__(self) -> int:
        return len(self.paths)

    def key_for(self, path: str) -> str:
        """Return the object key a local path uploads to."""
        return derive_object_key(self.source_dir, path, self.key_prefix)

    def keys(self) -> Set[str]:
        """Return the set of object keys this snapshot owns."""
        return {self.key_for(path) for path in self.paths}

    @property
    def list_prefix(self) -> str:
        """Prefix used to scope the remote listing ('' for the whole bucket)."""
        prefix = self.key_prefix.strip('/')
        return f"{prefix}/" if prefix else ''


@dataclass
class UploadReport:
    """Outcome of one upload pass."""
    total_files: int = 0
    processed_count: int = 0
    uploaded_keys: List[str] = field(default_factory=list)
    skipped_paths: List[str] = field(default_factory=list)
    failures: List[ObjectPutFailed] = field(default_factory=list)

    @property
    def uploaded_count(self) -> int:
        return len(self.uploaded_keys)


@dataclass
class ReconcileReport:
    """Outcome of one reconciliation pass."""
    surplus_count: int = 0
    deleted_keys: List[str] = field(default_factory=list)
    failures: List[ObjectDeleteFailed] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted_keys)


@dataclass
class SyncResult:
    """Aggregate result of a sync run."""
    bucket: str
    source_dir: str
    total_files: int = 0
    uploaded_count: int = 0
    upload_failures: List[ObjectPutFailed] = field(default_factory=list)
    deleted_count: int = 0
    delete_failures: List[ObjectDeleteFailed] = field(default_factory=list)
    deleted_keys: List[str] = field(default_factory=list)
    reconciled: bool = False
    duration: Optional[float] = None

    @property
    def succeeded(self) -> bool:
        """True when every upload and deletion went through."""
        return not self.upload_failures and not self.delete_failures

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            'bucket': self.bucket,
            'source_dir': self.source_dir,
            'total_files': self.total_files,
            'uploaded_count': self.uploaded_count,
            'upload_failures': [{'key': f.key, 'error': str(f.cause)} for f in self.upload_failures],
            'deleted_count': self.deleted_count,
            'delete_failures': [{'key': f.key, 'error': str(f.cause)} for f in self.delete_failures],
            'deleted_keys': list(self.deleted_keys),
            'reconciled': self.reconciled,
            'duration': self.duration,
            'succeeded': self.succeeded
        }
