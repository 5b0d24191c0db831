"""
File system utilities for Icon Copier.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class FileUtils:
    """Utility functions for file system operations."""

    @staticmethod
    def safe_filename(filename: str, replacement: str = '_') -> str:
        """
        Create a safe filename by replacing invalid characters.

        Args:
            filename: Original filename
            replacement: Character to replace invalid chars with

        Returns:
            Safe filename
        """
        # Characters that are invalid in filenames
        invalid_chars = '<>:"/\\|?*'

        safe_name = filename
        for char in invalid_chars:
            safe_name = safe_name.replace(char, replacement)

        # Remove leading/trailing spaces and dots
        safe_name = safe_name.strip(' .')

        # Ensure it's not empty
        if not safe_name:
            safe_name = 'unnamed'

        return safe_name

    @staticmethod
    def ensure_directory(directory: Path) -> bool:
        """
        Ensure a directory exists, creating it if necessary.

        Args:
            directory: Directory path

        Returns:
            True if directory exists or was created successfully
        """
        try:
            directory.mkdir(parents=True, exist_ok=True)
            return True
        except OSError as e:
            logger.error(f"Error creating directory {directory}: {e}")
            return False

    @staticmethod
    def with_suffix_appended(path: Path, suffix: str) -> Path:
        """
        Append suffix unless the path already ends with it.

        Unlike Path.with_suffix, a dotted stem such as "My.Icon" is kept.
        """
        if path.suffix.lower() == suffix.lower():
            return path
        return path.with_name(path.name + suffix)
