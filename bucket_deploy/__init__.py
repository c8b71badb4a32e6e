"""
Bucket Deploy - Mirror a local directory tree into an S3 bucket.
"""

from .services.sync_service import SyncService
from .models.config import DeployConfig, S3Config
from .models.data_models import SyncResult, LocalFileSet
from .models.errors import SourceNotFound, ObjectPutFailed, ObjectDeleteFailed, ObjectListFailed

__version__ = "1.0.0"
__all__ = [
    "SyncService",
    "DeployConfig",
    "S3Config",
    "SyncResult",
    "LocalFileSet",
    "SourceNotFound",
    "ObjectPutFailed",
    "ObjectDeleteFailed",
    "ObjectListFailed"
]
