# Client packages
from .s3_manager import S3Manager, S3Object

__all__ = ['S3Manager', 'S3Object']
