"""
Fixed-size bitmap rendering for icon export.
"""

import logging

from PySide6.QtCore import QBuffer, QIODevice, QRect, Qt
from PySide6.QtGui import QImage, QImageWriter, QPainter

from ..config.manager import ConfigurationManager
from .exceptions import FailureReason, RenderError
from .models import IconImage, RenderedBitmap


logger = logging.getLogger(__name__)


class BitmapRenderer:
    """
    Rasterizes icons onto a square RGBA canvas of an exact pixel size.

    The source is drawn at the top-left corner, stretched to the icon's
    logical size. The canvas is not fitted to that size: a logical size
    larger than the canvas is cropped, a smaller one leaves transparent
    padding.
    """

    PNG_FORMAT = b"png"

    def __init__(self, config_manager: ConfigurationManager):
        self.config_manager = config_manager
        self.png_quality = self.config_manager.get('export.png_quality', 100)

    def render(self, icon: IconImage, target_size: int) -> RenderedBitmap:
        """
        Render an icon into a target_size x target_size RGBA8888 bitmap.

        Raises:
            RenderError: If the size is invalid or compositing fails
        """
        size = self._validate_dimension(target_size)

        source = icon.image
        if source is None or source.isNull():
            raise RenderError("Icon has no image data", reason=FailureReason.COMPOSITING_FAILED)

        canvas = QImage(size, size, QImage.Format_RGBA8888)
        if canvas.isNull():
            raise RenderError(f"Cannot allocate a {size}x{size} bitmap")
        canvas.fill(Qt.transparent)

        bounds = self._logical_bounds(icon)
        source = QImage(source)
        source.setDevicePixelRatio(1.0)

        painter = QPainter()
        if not painter.begin(canvas):
            raise RenderError("Cannot paint on bitmap", reason=FailureReason.COMPOSITING_FAILED)
        try:
            painter.setCompositionMode(QPainter.CompositionMode_SourceOver)
            painter.setOpacity(1.0)
            painter.setRenderHint(QPainter.SmoothPixmapTransform, True)
            painter.drawImage(bounds, source, source.rect())
        finally:
            painter.end()

        logger.debug(f"Rendered {source.width()}x{source.height()} icon at "
                     f"{bounds.width()}x{bounds.height()} onto {size}x{size} canvas")
        return RenderedBitmap(canvas)

    def encode_png(self, bitmap: RenderedBitmap) -> bytes:
        """
        Serialize a bitmap as PNG.

        Raises:
            RenderError: If the encoder rejects the bitmap
        """
        buffer = QBuffer()
        buffer.open(QIODevice.WriteOnly)
        try:
            writer = QImageWriter(buffer, self.PNG_FORMAT)
            writer.setQuality(self.png_quality)
            if not writer.write(bitmap.image):
                raise RenderError(f"PNG encoding failed: {writer.errorString()}",
                                  reason=FailureReason.COMPOSITING_FAILED)
        finally:
            buffer.close()
        return buffer.data().data()

    @staticmethod
    def _logical_bounds(icon: IconImage) -> QRect:
        """Rectangle the source is drawn into; its own pixel size when no logical size is set."""
        logical = icon.logical_size
        if logical is None or logical.isEmpty():
            logical = icon.image.size()
        return QRect(0, 0, logical.width(), logical.height())

    @staticmethod
    def _validate_dimension(target_size) -> int:
        if isinstance(target_size, bool) or not isinstance(target_size, (int, float)):
            raise RenderError(f"Invalid bitmap size: {target_size!r}")
        if isinstance(target_size, float) and not target_size.is_integer():
            raise RenderError(f"Invalid bitmap size: {target_size!r}")
        if target_size <= 0:
            raise RenderError(f"Invalid bitmap size: {target_size!r}")
        return int(target_size)
