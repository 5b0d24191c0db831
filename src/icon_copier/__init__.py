"""
Icon Copier - extract application and file icons and export them as PNG.

Drop applications, documents or images onto the window, get their icons,
save or share them at a fixed pixel size.
Built with Python 3 and PySide6 for cross-platform compatibility.
"""

__version__ = "1.0.0"
__author__ = "Icon Copier Team"
__license__ = "MIT"

# Package metadata
__all__ = [
    "__version__",
    "__author__",
    "__license__",
]
