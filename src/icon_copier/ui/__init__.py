"""
User interface components for Icon Copier.
"""

from .main_window import MainWindow
from .drop_zone import IconDropZone

__all__ = [
    "MainWindow",
    "IconDropZone",
]
