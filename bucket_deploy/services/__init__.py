# Services package
from .work_queue import WorkQueue, ProgressCounter
from .file_scanner import scan_directory
from .upload_pool import UploadWorkerPool
from .reconciler import Reconciler
from .site_fixups import fix_font_paths

__all__ = [
    'WorkQueue',
    'ProgressCounter',
    'scan_directory',
    'UploadWorkerPool',
    'Reconciler',
    'fix_font_paths'
]
