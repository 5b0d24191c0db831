"""
Value types shared by the ingestion and export pipelines.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np
from PySide6.QtCore import QSize, QUrl
from PySide6.QtGui import QImage

from .exceptions import FailureReason


PNG_CONTENT_TYPE = "image/png"


class FileCategory(Enum):
    """Kind of file an icon is extracted from."""
    APPLICATION_BUNDLE = "application_bundle"
    IMAGE_FILE = "image_file"
    GENERIC_FILE = "generic_file"


@dataclass(frozen=True)
class ResolvedFile:
    """A concrete local file a dropped item resolved to."""
    path: Path

    @property
    def extension(self) -> str:
        return self.path.suffix[1:].lower()

    @property
    def url(self) -> QUrl:
        return QUrl.fromLocalFile(str(self.path))

    @property
    def display_name(self) -> str:
        return self.path.stem


@dataclass
class IconImage:
    """
    An in-memory icon.

    logical_size is the presentation size requested by the caller; the
    image keeps its native pixel resolution.
    """
    image: QImage
    logical_size: QSize
    source_path: Optional[Path] = None
    category: Optional[FileCategory] = None

    @property
    def pixel_size(self) -> QSize:
        return self.image.size()


@dataclass(frozen=True)
class ExtractionResult:
    """An extracted icon paired with the file it came from."""
    source_path: Path
    icon: IconImage

    @property
    def source_url(self) -> QUrl:
        return QUrl.fromLocalFile(str(self.source_path))

    @property
    def source_label(self) -> str:
        return self.source_path.stem


@dataclass(frozen=True)
class ItemFailure:
    """One dropped item that produced no icon."""
    index: int
    reason: FailureReason
    message: str = ""


@dataclass(frozen=True)
class IngestionReport:
    """Outcome counts for one ingestion batch."""
    total: int
    succeeded: int
    failures: Tuple[ItemFailure, ...] = ()

    @property
    def unsupported(self) -> int:
        return sum(1 for failure in self.failures
                   if failure.reason is FailureReason.UNSUPPORTED_REFERENCE)

    @property
    def failed(self) -> int:
        return len(self.failures) - self.unsupported


@dataclass(frozen=True)
class RenderedBitmap:
    """A fixed-size 8-bit RGBA pixel buffer."""
    image: QImage

    @property
    def width(self) -> int:
        return self.image.width()

    @property
    def height(self) -> int:
        return self.image.height()

    def to_array(self) -> np.ndarray:
        """Return the pixels as a (height, width, 4) uint8 array."""
        ptr = self.image.constBits()
        arr = np.array(ptr, dtype=np.uint8).reshape(self.height, self.image.bytesPerLine())
        return arr[:, :self.width * 4].reshape(self.height, self.width, 4)

    def pixel_bytes(self) -> bytes:
        return self.to_array().tobytes()


@dataclass(frozen=True)
class ExportTarget:
    """Destination of one exported icon."""
    path: Path
    content_type: str = PNG_CONTENT_TYPE


@dataclass(frozen=True)
class ExportFailure:
    """One icon that could not be exported."""
    source_label: str
    destination: Path
    reason: FailureReason
    message: str = ""


@dataclass(frozen=True)
class ExportResult:
    """Outcome of exporting a single icon."""
    target: ExportTarget
    failure: Optional[ExportFailure] = None

    @property
    def succeeded(self) -> bool:
        return self.failure is None


@dataclass
class BatchExportSummary:
    """Outcome of a batch export."""
    destination: Path
    saved_paths: List[Path] = field(default_factory=list)
    failures: List[ExportFailure] = field(default_factory=list)

    @property
    def saved_count(self) -> int:
        return len(self.saved_paths)
