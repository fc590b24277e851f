"""
Validators module for recovered file paths
"""
from .path_validator import IGNORED_PATHS, is_ignored_file_path, is_path_like, is_safe_file_path

__all__ = [
    "IGNORED_PATHS",
    "is_ignored_file_path",
    "is_path_like",
    "is_safe_file_path",
]
