"""
Core components for Icon Copier.

This module contains the ingestion pipeline that turns dropped items into
icons, and the rendering and export of those icons.
"""

from .bitmap_renderer import BitmapRenderer
from .export_pipeline import ExportPipeline
from .icon_extractor import IconExtractor
from .ingestion_coordinator import IconIngestionCoordinator
from .references import ItemReference, ReferenceClassifier, Strategy

__all__ = [
    "BitmapRenderer",
    "ExportPipeline",
    "IconExtractor",
    "IconIngestionCoordinator",
    "ItemReference",
    "ReferenceClassifier",
    "Strategy",
]
