"""
Pytest configuration and fixtures for the bucket deploy tests.
"""
import os
import threading
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import pytest
from loguru import logger

from bucket_deploy.clients.s3_manager import S3Object
from bucket_deploy.models.config import S3Config, DeployConfig

DEPLOY_ENV_VARS = [
    'DEPLOY_S3_ENDPOINT',
    'DEPLOY_S3_ACCESS_KEY',
    'DEPLOY_S3_SECRET_KEY',
    'DEPLOY_S3_BUCKET',
    'DEPLOY_S3_REGION',
    'DEPLOY_SOURCE_DIR',
    'DEPLOY_THREADS',
    'DEPLOY_KEY_PREFIX',
    'DEPLOY_ACL',
    'DEPLOY_LOG_FILE',
    'AWS_ACCESS_KEY_ID',
    'AWS_SECRET_ACCESS_KEY'
]


class FakeObjectStore:
    """
    In-memory, thread-safe stand-in for S3Manager.

    Keys listed in ``fail_put`` / ``fail_delete`` raise on the matching call.
    Every call is appended to ``calls`` as ``(operation, key)``.
    """

    def __init__(self, bucket: str = 'site-bucket', objects: Optional[Dict[str, bytes]] = None):
        self.bucket = bucket
        self.objects: Dict[str, bytes] = dict(objects or {})
        self.acls: Dict[str, str] = {}
        self.calls: List[Tuple[str, str]] = []
        self.fail_put = set()
        self.fail_delete = set()
        self.fail_list = False
        self._lock = threading.Lock()

    def put_object(self, key, body, acl='public-read', bucket=None):
        with self._lock:
            self.calls.append(('put', key))
            if key in self.fail_put:
                raise IOError(f"simulated put failure for {key}")
            self.objects[key] = body
            self.acls[key] = acl

    def list_objects(self, prefix='', bucket=None):
        with self._lock:
            self.calls.append(('list', prefix))
            if self.fail_list:
                raise IOError("simulated list failure")
            return [
                S3Object(key=key, size=len(body), last_modified=datetime.now(), etag='etag')
                for key, body in sorted(self.objects.items())
                if key.startswith(prefix)
            ]

    def delete_object(self, key, bucket=None):
        with self._lock:
            self.calls.append(('delete', key))
            if key in self.fail_delete:
                raise IOError(f"simulated delete failure for {key}")
            self.objects.pop(key, None)

    def test_connection(self, bucket=None):
        return True

    def calls_for(self, operation):
        return [key for op, key in self.calls if op == operation]


@pytest.fixture(autouse=True)
def clean_deploy_env(monkeypatch):
    """Keep real deploy/AWS settings out of every test."""
    for name in DEPLOY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def quiet_logger():
    """Silence loguru output during tests."""
    logger.remove()
    yield


@pytest.fixture
def s3_config():
    """Create a test S3 configuration."""
    return S3Config(
        endpoint='http://localhost:9000',
        access_key='deploy_key',
        secret_key='deploy_secret',
        bucket='site-bucket'
    )


@pytest.fixture
def deploy_config(s3_config, site_tree):
    """Create a deploy configuration pointing at the sample site."""
    return DeployConfig(s3=s3_config, source_dir=str(site_tree), thread_count=5)


@pytest.fixture
def fake_store():
    """Empty in-memory object store."""
    return FakeObjectStore()


@pytest.fixture
def site_tree(tmp_path):
    """A small generated site, including hidden files and nested directories."""
    root = tmp_path / 'build'
    files = {
        'index.html': b'<html>home</html>',
        'about/index.html': b'<html>about</html>',
        'assets/img/logo.png': b'\x89PNG fake',
        'assets/css/site.css': b'body { margin: 0 }',
        '.nojekyll': b'',
        'assets/.hidden/config.json': b'{}'
    }
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
    (root / 'empty-dir').mkdir()
    return root


def site_keys():
    """Keys the site_tree fixture uploads to."""
    return {
        'index.html',
        'about/index.html',
        'assets/img/logo.png',
        'assets/css/site.css',
        '.nojekyll',
        'assets/.hidden/config.json'
    }


def make_tree(root, count):
    """Create count files spread over a few directories under root."""
    for i in range(count):
        path = os.path.join(str(root), f"dir{i % 7}", f"file{i}.txt")
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, 'wb') as f:
            f.write(f"content {i}".encode())
    return {f"dir{i % 7}/file{i}.txt" for i in range(count)}
