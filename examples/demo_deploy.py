#!/usr/bin/env python3
"""
Simple demo of the bucket deploy service against a local MinIO.

This script demonstrates:
- Building a small site directory
- A first deploy that uploads everything
- A second deploy after removing a page, which prunes the stale object
"""
import sys
import tempfile
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from bucket_deploy.models.config import DeployConfig, S3Config
from bucket_deploy.services.sync_service import SyncService
from loguru import logger


def build_demo_site(root: Path):
    """Write a handful of pages and assets under root."""
    pages = {
        'index.html': '<h1>Home</h1>',
        'about/index.html': '<h1>About</h1>',
        'assets/css/site.css': 'body { font-family: sans-serif }',
        '.nojekyll': ''
    }
    for relative, content in pages.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)


def main():
    """Run deploy demo."""
    logger.remove()
    logger.add(sys.stderr, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> - <level>{message}</level>", level="INFO")

    logger.info("🚀 Bucket Deploy Demo")

    config = DeployConfig(
        s3=S3Config(
            endpoint='http://localhost:9000',
            access_key='minioadmin',
            secret_key='minioadmin',
            bucket='demo-site',
            region='us-east-1'
        ),
        thread_count=4
    )

    try:
        with tempfile.TemporaryDirectory() as tmp:
            site = Path(tmp) / 'build'
            build_demo_site(site)

            sync_service = SyncService(config)
            status = sync_service.get_sync_status()
            logger.info(f"Service status: {status['service_status']}")

            logger.info("Running first deploy...")
            results = sync_service.sync(str(site))
            logger.success(f"✅ Uploaded {results.uploaded_count}/{results.total_files} files")

            (site / 'about' / 'index.html').unlink()

            logger.info("Running second deploy after removing about/index.html...")
            results = sync_service.sync(str(site))
            logger.info(f"Deleted: {results.deleted_keys}")

    except Exception as e:
        logger.error(f"❌ Demo failed: {str(e)}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
