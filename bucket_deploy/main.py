"""
Main entry point for the bucket deploy service.
"""
import argparse
import json
import shutil
import sys
import threading
from dataclasses import replace
from typing import Optional

from loguru import logger

from .models.config import DeployConfig
from .models.errors import SourceNotFound, ObjectListFailed
from .services.site_fixups import fix_font_paths
from .services.sync_service import SyncService

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_PARTIAL = 2


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Configure logging for the deploy service."""
    # Remove default logger
    logger.remove()

    logger.add(
        sys.stderr,
        format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        level=level
    )

    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="7 days",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
            level="DEBUG"
        )


class ProgressPrinter:
    """Renders an in-place ``Uploading... [i/total]`` line on a stream."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stderr
        self._lock = threading.Lock()

    def __call__(self, number: int, total: int, key: str):
        with self._lock:
            self.stream.write(f"\rUploading... [{number}/{total}]")
            self.stream.flush()

    def finish(self):
        with self._lock:
            self.stream.write("\r" + "Upload complete!".ljust(80) + "\n")
            self.stream.flush()


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="bucket-deploy",
        description="Mirror a local build directory into an S3 bucket."
    )
    subparsers = parser.add_subparsers(dest="command")

    deploy = subparsers.add_parser("deploy", help="Upload a directory and prune stale objects")
    deploy.add_argument("-b", "--bucket", help="S3 bucket to deploy to (default: $DEPLOY_S3_BUCKET)")
    deploy.add_argument("-o", "--output-dir", dest="source_dir",
                        help="Build directory to upload (default: $DEPLOY_SOURCE_DIR or 'build')")
    deploy.add_argument("-t", "--threads", type=int, help="Number of upload threads (default: 8)")
    deploy.add_argument("-k", "--aws-key", help="Access key (default: $DEPLOY_S3_ACCESS_KEY or $AWS_ACCESS_KEY_ID)")
    deploy.add_argument("-s", "--aws-secret", help="Secret key (default: $DEPLOY_S3_SECRET_KEY or $AWS_SECRET_ACCESS_KEY)")
    deploy.add_argument("-p", "--prefix", help="Only sync and prune keys under this prefix")
    deploy.add_argument("--endpoint", help="S3 endpoint URL (default: AWS)")
    deploy.add_argument("--region", help="S3 region")
    deploy.add_argument("--acl", help="Canned ACL for uploaded objects (default: public-read)")
    deploy.add_argument("--fix-css", action="store_true",
                        help="Rewrite './/fonts' to './fonts' in gitbook stylesheets before upload")
    deploy.add_argument("--clean", action="store_true", help="Remove the build directory after deploying")
    deploy.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    status = subparsers.add_parser("status", help="Check that the bucket is reachable")
    status.add_argument("-b", "--bucket", help="S3 bucket to check (default: $DEPLOY_S3_BUCKET)")
    status.add_argument("--endpoint", help="S3 endpoint URL (default: AWS)")
    status.add_argument("--region", help="S3 region")
    status.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return parser


def load_config(args: argparse.Namespace) -> DeployConfig:
    """Load configuration from the environment and apply command line overrides."""
    config = DeployConfig.from_env()

    s3_overrides = {}
    if args.bucket:
        s3_overrides['bucket'] = args.bucket
    if args.endpoint:
        s3_overrides['endpoint'] = args.endpoint
    if args.region:
        s3_overrides['region'] = args.region
    if getattr(args, 'aws_key', None):
        s3_overrides['access_key'] = args.aws_key
    if getattr(args, 'aws_secret', None):
        s3_overrides['secret_key'] = args.aws_secret

    overrides = {}
    if s3_overrides:
        overrides['s3'] = replace(config.s3, **s3_overrides)
    if getattr(args, 'source_dir', None):
        overrides['source_dir'] = args.source_dir
    if getattr(args, 'threads', None) is not None:
        overrides['thread_count'] = args.threads
    if getattr(args, 'prefix', None):
        overrides['key_prefix'] = args.prefix
    if getattr(args, 'acl', None):
        overrides['acl'] = args.acl

    return replace(config, **overrides) if overrides else config


def run_deploy(config: DeployConfig, fix_css: bool = False, clean: bool = False) -> int:
    """Run a deploy and map its outcome to an exit code."""
    logger.info(f"Deploying {config.source_dir} to bucket {config.s3.bucket}")

    if fix_css:
        fixed = fix_font_paths(config.source_dir)
        logger.info(f"Fixed font paths in {len(fixed)} stylesheet(s)")

    sync_service = SyncService(config)
    progress = ProgressPrinter()

    try:
        result = sync_service.sync(config.source_dir, config.s3.bucket, config.thread_count, on_progress=progress)
    except SourceNotFound as e:
        logger.error(str(e))
        return EXIT_FATAL
    except ObjectListFailed as e:
        progress.finish()
        logger.error(str(e))
        if e.result is not None:
            logger.info(f"Upload results: {json.dumps(e.result.to_dict(), indent=2, default=str)}")
        return EXIT_FATAL

    progress.finish()
    logger.info(f"Sync Results: {json.dumps(result.to_dict(), indent=2, default=str)}")

    if clean:
        logger.info(f"Removing build directory: {config.source_dir}")
        shutil.rmtree(config.source_dir)

    if not result.succeeded:
        logger.warning(f"Deploy finished with {len(result.upload_failures)} upload failure(s) "
                       f"and {len(result.delete_failures)} delete failure(s)")
        return EXIT_PARTIAL

    logger.success("Deploy completed successfully")
    return EXIT_OK


def run_status(config: DeployConfig) -> int:
    """Report whether the configured bucket is reachable."""
    sync_service = SyncService(config)
    status = sync_service.get_sync_status()
    logger.info(f"Service Status: {json.dumps(status, indent=2)}")
    return EXIT_OK if status['service_status'] == 'healthy' else EXIT_FATAL


def main(argv=None) -> int:
    """Main entry point with command line argument handling."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_FATAL

    try:
        config = load_config(args)
    except ValueError as e:
        setup_logging()
        logger.error(f"Invalid configuration: {e}")
        return EXIT_FATAL

    setup_logging("DEBUG" if args.verbose else "INFO", config.log_file)

    if not config.s3.bucket:
        logger.error("No bucket given - use --bucket or set DEPLOY_S3_BUCKET")
        parser.print_usage(sys.stderr)
        return EXIT_FATAL

    try:
        if args.command == "deploy":
            return run_deploy(config, fix_css=args.fix_css, clean=args.clean)
        return run_status(config)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal, shutting down")
        return EXIT_FATAL
    except Exception as e:
        logger.error(f"Command failed: {str(e)}")
        return EXIT_FATAL


if __name__ == "__main__":
    sys.exit(main())
