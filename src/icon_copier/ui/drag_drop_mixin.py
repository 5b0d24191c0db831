"""
Drag and drop functionality mixin for Icon Copier.
"""

import logging
from typing import List

from PySide6.QtCore import QMimeData
from PySide6.QtGui import QDragEnterEvent, QDragMoveEvent, QDropEvent

from ..core.references import ItemReference, references_from_mime_data

logger = logging.getLogger(__name__)


class DragDropMixin:
    """
    Mixin class turning drops into item references.

    Usage:
        class MyWidget(DragDropMixin, QWidget):
            references_dropped = Signal(list)

            def __init__(self):
                super().__init__()
                self.setup_drag_drop()

            def handle_dropped_references(self, references):
                self.references_dropped.emit(references)
    """

    def setup_drag_drop(self, application_extensions=("app",)):
        """
        Setup drag and drop for the widget.

        Args:
            application_extensions: Extensions of application bundles,
                without the leading dot
        """
        self.setAcceptDrops(True)
        self._application_extensions = tuple(application_extensions)
        self._drag_targeted = False

        logger.debug(f"Drag-drop enabled for {self.__class__.__name__}")

    def dragEnterEvent(self, event: QDragEnterEvent):
        """Handle drag enter event."""
        if self._has_payload(event.mimeData()):
            event.acceptProposedAction()
            self._set_drag_targeted(True)
        else:
            event.ignore()

    def dragMoveEvent(self, event: QDragMoveEvent):
        """Handle drag move event."""
        if self._has_payload(event.mimeData()):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragLeaveEvent(self, event):
        """Handle drag leave event."""
        self._set_drag_targeted(False)
        event.accept()

    def dropEvent(self, event: QDropEvent):
        """Handle drop event."""
        self._set_drag_targeted(False)

        if not self._has_payload(event.mimeData()):
            event.ignore()
            return

        references = references_from_mime_data(event.mimeData(), self._application_extensions)
        logger.info(f"{len(references)} items dropped")

        event.acceptProposedAction()
        if references:
            self.handle_dropped_references(references)

    def handle_dropped_references(self, references: List[ItemReference]) -> None:
        """Called with the references of every accepted drop."""
        raise NotImplementedError

    def drag_targeted_changed(self, targeted: bool) -> None:
        """Called when a drag enters or leaves the widget."""

    def _set_drag_targeted(self, targeted: bool) -> None:
        if targeted != self._drag_targeted:
            self._drag_targeted = targeted
            self.drag_targeted_changed(targeted)

    @staticmethod
    def _has_payload(mime_data: QMimeData) -> bool:
        """Any payload is accepted; unsupported items are skipped later."""
        return mime_data is not None and bool(mime_data.formats())
