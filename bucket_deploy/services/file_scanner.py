"""
Local directory enumeration for deploys.
"""
import os

from loguru import logger

from ..models.data_models import LocalFileSet
from ..models.errors import SourceNotFound


def scan_directory(source_dir: str, key_prefix: str = '') -> LocalFileSet:
    """
    Enumerate every file under source_dir, recursively.

    Hidden files are included and directory entries are left out. Paths are
    sorted so the snapshot is stable between runs.

    Args:
        source_dir: Directory to enumerate
        key_prefix: Optional key prefix applied to every derived key

    Returns:
        LocalFileSet snapshot

    Raises:
        SourceNotFound: If source_dir is missing or any part of it cannot be read
    """
    if not os.path.isdir(source_dir):
        raise SourceNotFound(source_dir)

    def _on_error(error: OSError):
        raise SourceNotFound(error.filename or source_dir, error) from error

    paths = []
    for root, _dirs, files in os.walk(source_dir, onerror=_on_error):
        for name in files:
            path = os.path.join(root, name)
            if os.path.isdir(path):
                continue
            paths.append(path)

    paths.sort()
    logger.info(f"Found {len(paths)} files under {source_dir}")
    return LocalFileSet(source_dir=source_dir, paths=tuple(paths), key_prefix=key_prefix)
