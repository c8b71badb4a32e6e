"""
S3 client manager for writing, listing and deleting objects in a deploy bucket.
"""
import mimetypes
import time
from typing import List, Optional

import boto3
from botocore.exceptions import ClientError, EndpointConnectionError
from loguru import logger

from ..models.config import S3Config, DEFAULT_ACL

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


class S3Object:
    """Represents an S3 object with metadata."""

    def __init__(self, key: str, size: int, last_modified, etag: str, storage_class: str = 'STANDARD'):
        self.key = key
        self.size = size
        self.last_modified = last_modified
        self.etag = etag
        self.storage_class = storage_class


class S3Manager:
    """
    Thin authenticated handle to the deploy bucket.

    Every operation targets the configured bucket unless a ``bucket``
    override is passed. boto3 clients are thread-safe, so one manager is
    shared by all upload workers.
    """

    def __init__(self, config: S3Config, max_retries: int = 3, backoff_factor: float = 1.0):
        """Initialize S3Manager with explicit connection configuration."""
        self.config = config
        self.max_retries = max_retries
        self.backoff_factor = backoff_factor

        self.client = self._create_s3_client(config)

        logger.info(f"S3Manager initialized for bucket: {config.bucket}")

    @property
    def bucket(self) -> str:
        return self.config.bucket

    def _create_s3_client(self, config: S3Config):
        """Create an S3 client from configuration."""
        try:
            client = boto3.client(
                's3',
                endpoint_url=config.endpoint or None,
                aws_access_key_id=config.access_key or None,
                aws_secret_access_key=config.secret_key or None,
                region_name=config.region or 'us-east-1'
            )
            logger.debug(f"Created S3 client for endpoint: {config.endpoint or 'aws default'}")
            return client
        except Exception as e:
            logger.error(f"Failed to create S3 client for {config.endpoint}: {e}")
            raise

    def _retry_operation(self, operation, max_retries: Optional[int] = None, backoff_factor: Optional[float] = None):
        """Execute an operation with exponential backoff retry logic."""
        max_retries = max_retries or self.max_retries
        backoff_factor = self.backoff_factor if backoff_factor is None else backoff_factor
        for attempt in range(max_retries):
            try:
                return operation()
            except (ClientError, EndpointConnectionError) as e:
                if attempt == max_retries - 1:
                    logger.error(f"Operation failed after {max_retries} attempts: {e}")
                    raise

                wait_time = backoff_factor * (2 ** attempt)
                logger.warning(f"Operation failed (attempt {attempt + 1}/{max_retries}), retrying in {wait_time}s: {e}")
                time.sleep(wait_time)

    def put_object(self, key: str, body: bytes, acl: str = DEFAULT_ACL, bucket: Optional[str] = None) -> None:
        """
        Write an object, replacing any existing object under the same key.

        Args:
            key: Object key in the bucket
            body: Object contents
            acl: Canned ACL applied on write
            bucket: Bucket override
        """
        bucket = bucket or self.bucket
        content_type = mimetypes.guess_type(key)[0] or DEFAULT_CONTENT_TYPE

        def _put_operation():
            return self.client.put_object(
                Bucket=bucket,
                Key=key,
                Body=body,
                ACL=acl,
                ContentType=content_type
            )

        self._retry_operation(_put_operation)
        logger.debug(f"Put object {key} ({len(body)} bytes, {content_type}) to {bucket}")

    def list_objects(self, prefix: str = '', bucket: Optional[str] = None) -> List[S3Object]:
        """
        List every object in the bucket, optionally scoped to a key prefix.

        All pages are drained before returning so callers always see the
        complete listing.

        Returns:
            List of S3Object
        """
        bucket = bucket or self.bucket

        def _list_operation():
            paginator = self.client.get_paginator('list_objects_v2')
            page_iterator = paginator.paginate(Bucket=bucket, Prefix=prefix)

            objects = []
            for page in page_iterator:
                for obj in page.get('Contents', []):
                    objects.append(S3Object(
                        key=obj['Key'],
                        size=obj['Size'],
                        last_modified=obj['LastModified'],
                        etag=obj['ETag'].strip('"'),
                        storage_class=obj.get('StorageClass', 'STANDARD')
                    ))
            return objects

        try:
            objects = self._retry_operation(_list_operation)
            logger.debug(f"Listed {len(objects)} objects in {bucket} (prefix: {prefix!r})")
            return objects
        except Exception as e:
            logger.error(f"Failed to list objects in {bucket}: {e}")
            raise

    def delete_object(self, key: str, bucket: Optional[str] = None) -> None:
        """Delete a single object."""
        bucket = bucket or self.bucket

        def _delete_operation():
            return self.client.delete_object(Bucket=bucket, Key=key)

        self._retry_operation(_delete_operation)
        logger.debug(f"Deleted object {key} from {bucket}")

    def test_connection(self, bucket: Optional[str] = None) -> bool:
        """
        Test connection to the bucket.

        Returns:
            bool: True if connection successful, False otherwise
        """
        bucket = bucket or self.bucket
        try:
            self.client.head_bucket(Bucket=bucket)
            logger.info(f"S3 connection test successful for bucket: {bucket}")
            return True
        except Exception as e:
            logger.error(f"S3 connection test failed for bucket {bucket}: {e}")
            return False
