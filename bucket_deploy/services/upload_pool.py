"""
Concurrent upload of a LocalFileSet to the deploy bucket.
"""
import os
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Optional

from loguru import logger

from ..clients.s3_manager import S3Manager
from ..models.config import DEFAULT_ACL
from ..models.data_models import LocalFileSet, UploadReport
from ..models.errors import ObjectPutFailed
from .work_queue import WorkQueue, ProgressCounter

# (file number, total files, object key)
ProgressCallback = Callable[[int, int, str], None]


class UploadWorkerPool:
    """
    Drains a WorkQueue of local paths with a fixed number of worker threads.

    Each worker pops a path, derives its key, reads the file and writes it to
    the bucket. A failed put is recorded and the worker moves on to the next
    item; ``run`` returns once every worker has exited.
    """

    def __init__(self, s3_manager: S3Manager, thread_count: int, acl: str = DEFAULT_ACL,
                 bucket: Optional[str] = None, on_progress: Optional[ProgressCallback] = None):
        if thread_count < 1:
            raise ValueError(f"thread_count must be at least 1, got {thread_count}")
        self.s3_manager = s3_manager
        self.thread_count = thread_count
        self.acl = acl
        self.bucket = bucket
        self.on_progress = on_progress
        self._lock = threading.Lock()

    def run(self, file_set: LocalFileSet, queue: Optional[WorkQueue] = None) -> UploadReport:
        """
        Upload every file in the set and block until all workers finish.

        Args:
            file_set: Snapshot of files to upload
            queue: Queue over file_set.paths; built here when not supplied

        Returns:
            UploadReport with uploaded keys, skipped paths and failures
        """
        if queue is None:
            queue = WorkQueue(file_set.paths)
        report = UploadReport(total_files=len(file_set))
        progress = ProgressCounter(len(file_set))

        logger.info(f"Uploading {len(file_set)} files with {self.thread_count} worker(s)")

        with ThreadPoolExecutor(max_workers=self.thread_count, thread_name_prefix='upload') as executor:
            futures = [
                executor.submit(self._worker, file_set, queue, progress, report)
                for _ in range(self.thread_count)
            ]
            for future in futures:
                future.result()

        report.processed_count = progress.value
        logger.info(f"Upload pass finished - Uploaded: {report.uploaded_count}, "
                    f"Skipped: {len(report.skipped_paths)}, Failed: {len(report.failures)}")
        return report

    def _worker(self, file_set: LocalFileSet, queue: WorkQueue,
                progress: ProgressCounter, report: UploadReport) -> None:
        """Pop and upload items until the queue reports empty."""
        while True:
            path, ok = queue.pop()
            if not ok:
                return

            number = progress.increment()
            key = file_set.key_for(path)
            if self.on_progress is not None:
                self.on_progress(number, progress.total, key)

            if os.path.isdir(path):
                logger.debug(f"Skipping directory: {path}")
                with self._lock:
                    report.skipped_paths.append(path)
                continue

            try:
                with open(path, 'rb') as fh:
                    body = fh.read()
                self.s3_manager.put_object(key, body, acl=self.acl, bucket=self.bucket)
            except Exception as e:
                logger.error(f"Failed to upload {key}: {e}")
                with self._lock:
                    report.failures.append(ObjectPutFailed(key, e))
                continue

            logger.debug(f"Uploaded {key}")
            with self._lock:
                report.uploaded_keys.append(key)
