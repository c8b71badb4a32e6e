"""
Configuration classes for the bucket deploy service.
"""
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_THREAD_COUNT = 8
DEFAULT_ACL = 'public-read'


@dataclass
class S3Config:
    """Configuration for S3 service connection."""
    endpoint: str
    access_key: str
    secret_key: str
    bucket: str
    region: Optional[str] = None

    @classmethod
    def from_env(cls, prefix: str) -> 'S3Config':
        """
        Create S3Config from environment variables with given prefix.

        Credentials fall back to the standard AWS variables when the
        prefixed ones are not set.
        """
        return cls(
            endpoint=os.getenv(f'{prefix}_S3_ENDPOINT', ''),
            access_key=os.getenv(f'{prefix}_S3_ACCESS_KEY') or os.getenv('AWS_ACCESS_KEY_ID', ''),
            secret_key=os.getenv(f'{prefix}_S3_SECRET_KEY') or os.getenv('AWS_SECRET_ACCESS_KEY', ''),
            bucket=os.getenv(f'{prefix}_S3_BUCKET', ''),
            region=os.getenv(f'{prefix}_S3_REGION')
        )


@dataclass
class DeployConfig:
    """Main configuration for a directory-to-bucket deploy."""
    s3: S3Config
    source_dir: str = 'build'
    thread_count: int = DEFAULT_THREAD_COUNT
    key_prefix: str = ''
    acl: str = DEFAULT_ACL
    log_file: Optional[str] = None

    def __post_init__(self):
        if self.thread_count < 1:
            raise ValueError(f"thread_count must be at least 1, got {self.thread_count}")

    @classmethod
    def from_env(cls) -> 'DeployConfig':
        """Create DeployConfig from environment variables."""
        return cls(
            s3=S3Config.from_env('DEPLOY'),
            source_dir=os.getenv('DEPLOY_SOURCE_DIR', 'build'),
            thread_count=int(os.getenv('DEPLOY_THREADS', str(DEFAULT_THREAD_COUNT))),
            key_prefix=os.getenv('DEPLOY_KEY_PREFIX', ''),
            acl=os.getenv('DEPLOY_ACL', DEFAULT_ACL),
            log_file=os.getenv('DEPLOY_LOG_FILE') or None
        )
