"""Services for scanning and file enumeration."""

from .checker import GuardService
from .file_extractor import collect_files

__all__ = ["GuardService", "collect_files"]
