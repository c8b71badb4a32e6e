"""
Removal of remote objects that no longer have a local counterpart.
"""
from typing import Optional, Set

from loguru import logger

from ..clients.s3_manager import S3Manager
from ..models.data_models import LocalFileSet, ReconcileReport
from ..models.errors import ObjectDeleteFailed, ObjectListFailed


class Reconciler:
    """
    Deletes every remote key that is not in the local key set.

    Only key membership is compared; objects present on both sides are left
    alone whatever their content.
    """

    def __init__(self, s3_manager: S3Manager, bucket: Optional[str] = None):
        self.s3_manager = s3_manager
        self.bucket = bucket

    def surplus_keys(self, local_keys: Set[str], prefix: str = '') -> Set[str]:
        """
        Return remote keys under prefix that are missing locally.

        Raises:
            ObjectListFailed: If the bucket cannot be listed
        """
        try:
            remote_objects = self.s3_manager.list_objects(prefix=prefix, bucket=self.bucket)
        except Exception as e:
            raise ObjectListFailed(e) from e

        remote_keys = {obj.key for obj in remote_objects}
        return remote_keys - local_keys

    def reconcile(self, file_set: LocalFileSet) -> ReconcileReport:
        """
        Delete surplus remote objects for a local snapshot.

        When the snapshot carries a key prefix only that prefix is listed;
        otherwise the whole bucket is considered.

        Returns:
            ReconcileReport with the deleted keys and per-key failures

        Raises:
            ObjectListFailed: If the bucket cannot be listed
        """
        prefix = file_set.list_prefix
        logger.info(f"Reconciling remote objects (prefix: {prefix or '<whole bucket>'})")

        local_keys = file_set.keys()
        surplus = self.surplus_keys(local_keys, prefix)
        report = ReconcileReport(surplus_count=len(surplus))

        for key in sorted(surplus):
            logger.info(f"Deleting {key}")
            try:
                self.s3_manager.delete_object(key, bucket=self.bucket)
            except Exception as e:
                logger.error(f"Failed to delete {key}: {e}")
                report.failures.append(ObjectDeleteFailed(key, e))
                continue
            report.deleted_keys.append(key)

        logger.info(f"Reconciliation finished - Deleted: {report.deleted_count}, "
                    f"Failed: {len(report.failures)}")
        return report
