"""
Utility module.

Common utilities for logging and file handling.
"""

from .logging import setup_logging, get_logger
from .files import ensure_dir, iter_files, write_text_file

__all__ = ["setup_logging", "get_logger", "ensure_dir", "iter_files", "write_text_file"]
