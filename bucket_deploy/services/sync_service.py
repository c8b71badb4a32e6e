"""
Main sync service orchestrator for directory to bucket deploys.
"""
import time
from typing import Optional

from loguru import logger

from ..clients.s3_manager import S3Manager
from ..models.config import DeployConfig
from ..models.data_models import SyncResult
from ..models.errors import ObjectListFailed
from .file_scanner import scan_directory
from .reconciler import Reconciler
from .upload_pool import UploadWorkerPool, ProgressCallback
from .work_queue import WorkQueue


class SyncService:
    """
    Mirrors a local directory into a bucket.

    A run enumerates the directory once, uploads every file through the
    worker pool, then deletes remote objects that have no local file. The
    deletion pass only starts after every upload worker has exited.
    """

    def __init__(self, config: DeployConfig, s3_manager: Optional[S3Manager] = None):
        """
        Initialize sync service with configuration.

        Args:
            config: DeployConfig containing connection and deploy settings
            s3_manager: Client to use instead of one built from config.s3
        """
        self.config = config
        self.s3_manager = s3_manager or S3Manager(config.s3)

        logger.info("SyncService initialized successfully")

    def sync(self, source_dir: Optional[str] = None, bucket: Optional[str] = None,
             thread_count: Optional[int] = None,
             on_progress: Optional[ProgressCallback] = None) -> SyncResult:
        """
        Upload source_dir to bucket and prune remote objects missing locally.

        Args:
            source_dir: Directory to deploy (defaults to config.source_dir)
            bucket: Target bucket (defaults to the configured bucket)
            thread_count: Number of upload workers (defaults to config.thread_count)
            on_progress: Called with (file number, total, key) per file handed out

        Returns:
            SyncResult with upload and deletion counts and per-item failures

        Raises:
            SourceNotFound: If source_dir does not exist; nothing is uploaded or deleted
            ObjectListFailed: If the bucket cannot be listed; ``result`` holds the upload outcome
        """
        source_dir = source_dir or self.config.source_dir
        bucket = bucket or self.s3_manager.bucket
        thread_count = thread_count or self.config.thread_count
        start_time = time.monotonic()

        logger.info(f"Starting sync of {source_dir} to bucket {bucket}")

        file_set = scan_directory(source_dir, key_prefix=self.config.key_prefix)
        queue = WorkQueue(file_set.paths)

        pool = UploadWorkerPool(
            self.s3_manager,
            thread_count,
            acl=self.config.acl,
            bucket=bucket,
            on_progress=on_progress
        )
        upload_report = pool.run(file_set, queue)

        result = SyncResult(
            bucket=bucket,
            source_dir=source_dir,
            total_files=len(file_set),
            uploaded_count=upload_report.uploaded_count,
            upload_failures=list(upload_report.failures)
        )

        if upload_report.failures:
            logger.warning(f"{len(upload_report.failures)} upload(s) failed - continuing with reconciliation")

        reconciler = Reconciler(self.s3_manager, bucket=bucket)
        try:
            reconcile_report = reconciler.reconcile(file_set)
        except ObjectListFailed as e:
            result.duration = time.monotonic() - start_time
            e.result = result
            logger.error(f"Reconciliation aborted: {e}")
            raise

        result.deleted_count = reconcile_report.deleted_count
        result.deleted_keys = list(reconcile_report.deleted_keys)
        result.delete_failures = list(reconcile_report.failures)
        result.reconciled = True
        result.duration = time.monotonic() - start_time

        logger.info(f"Sync completed - Uploaded: {result.uploaded_count}/{result.total_files}, "
                    f"Upload failures: {len(result.upload_failures)}, "
                    f"Deleted: {result.deleted_count}, "
                    f"Delete failures: {len(result.delete_failures)}, "
                    f"Duration: {result.duration:.2f} seconds")
        return result

    def get_sync_status(self, bucket: Optional[str] = None) -> dict:
        """
        Get current service status.

        Returns:
            Dictionary containing service status information
        """
        bucket = bucket or self.s3_manager.bucket
        connected = self.s3_manager.test_connection(bucket=bucket)
        return {
            'service_status': 'healthy' if connected else 'unreachable',
            'bucket': bucket,
            'endpoint': self.config.s3.endpoint or 'aws default',
            'source_dir': self.config.source_dir,
            'key_prefix': self.config.key_prefix,
            'thread_count': self.config.thread_count
        }
