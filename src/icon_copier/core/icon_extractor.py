"""
Icon extraction for Icon Copier.
"""

import logging
from typing import Optional

from PySide6.QtCore import QFileInfo, QSize
from PySide6.QtGui import QIcon, QImage, QImageReader
from PySide6.QtWidgets import QFileIconProvider

from ..config.manager import ConfigurationManager
from .exceptions import IconExtractionError
from .models import FileCategory, IconImage, ResolvedFile


logger = logging.getLogger(__name__)


class IconExtractor:
    """
    Produces one icon image for a resolved file.

    Application bundles and generic files get the icon the platform shows
    for them; image files are their own icon.

    Uses QFileIconProvider, so it must run on the GUI thread.
    """

    def __init__(self, config_manager: ConfigurationManager, icon_provider=None):
        self.config_manager = config_manager
        self.icon_provider = icon_provider or QFileIconProvider()

        self.image_extensions = {
            ext.lower() for ext in self.config_manager.get(
                'icons.image_extensions', ["png", "jpg", "jpeg", "gif", "bmp", "tiff"])
        }
        self.application_extensions = {
            ext.lower() for ext in self.config_manager.get('icons.application_extensions', ["app"])
        }

    def categorize(self, resolved: ResolvedFile) -> FileCategory:
        """Categorize a file by its extension, case-insensitively."""
        extension = resolved.extension
        if extension in self.application_extensions:
            return FileCategory.APPLICATION_BUNDLE
        if extension in self.image_extensions:
            return FileCategory.IMAGE_FILE
        return FileCategory.GENERIC_FILE

    def extract(self, resolved: ResolvedFile, target_size: int) -> IconImage:
        """
        Extract the icon for a file.

        Args:
            resolved: File to extract the icon from
            target_size: Logical size, in pixels, reported by the icon

        Returns:
            IconImage whose logical size is target_size x target_size

        Raises:
            IconExtractionError: If no icon representation is available
        """
        if isinstance(target_size, bool) or int(target_size) < 1:
            raise IconExtractionError(f"Invalid icon size: {target_size}")
        target_size = int(target_size)

        if not resolved.path.exists():
            raise IconExtractionError(f"File no longer exists: {resolved.path}")

        category = self.categorize(resolved)
        logger.debug(f"Extracting icon from {resolved.path} as {category.value}")

        if category is FileCategory.IMAGE_FILE:
            image = self._load_image(resolved)
        else:
            image = self._platform_icon(resolved, target_size)

        # Presentation hint only: pixels stay at native resolution
        icon = IconImage(
            image=image,
            logical_size=QSize(target_size, target_size),
            source_path=resolved.path,
            category=category,
        )
        logger.debug(f"Icon extracted for {resolved.display_name}: "
                     f"{image.width()}x{image.height()} px, logical {target_size}x{target_size}")
        return icon

    def _load_image(self, resolved: ResolvedFile) -> QImage:
        """Load an image file's own pixels."""
        reader = QImageReader(str(resolved.path))
        image = reader.read()
        if image.isNull():
            raise IconExtractionError(
                f"Cannot read image {resolved.path}: {reader.errorString()}")
        return image

    def _platform_icon(self, resolved: ResolvedFile, target_size: int) -> QImage:
        """Ask the platform for the icon it shows for a path."""
        icon: Optional[QIcon] = self.icon_provider.icon(QFileInfo(str(resolved.path)))
        if icon is None or icon.isNull():
            raise IconExtractionError(f"No platform icon for {resolved.path}")

        image = icon.pixmap(QSize(target_size, target_size)).toImage()
        if image.isNull():
            raise IconExtractionError(f"Platform icon for {resolved.path} has no pixels")
        return image
