"""
Models package for the bucket deploy service.
"""
from .data_models import LocalFileSet, SyncResult, UploadReport, ReconcileReport, derive_object_key
from .config import S3Config, DeployConfig
from .errors import (
    SyncError,
    SourceNotFound,
    ObjectPutFailed,
    ObjectDeleteFailed,
    ObjectListFailed
)

__all__ = [
    'LocalFileSet',
    'SyncResult',
    'UploadReport',
    'ReconcileReport',
    'derive_object_key',
    'S3Config',
    'DeployConfig',
    'SyncError',
    'SourceNotFound',
    'ObjectPutFailed',
    'ObjectDeleteFailed',
    'ObjectListFailed'
]
