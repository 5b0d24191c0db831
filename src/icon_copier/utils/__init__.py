"""
Utility modules for Icon Copier.
"""

from .file_utils import FileUtils

__all__ = [
    "FileUtils",
]
