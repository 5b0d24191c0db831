"""
Drop zone widget showing the extracted icons.
"""

import logging
from typing import List

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QAction, QKeySequence, QPixmap
from PySide6.QtWidgets import QLabel, QMenu, QProgressBar, QVBoxLayout, QWidget

from ..core.models import ExtractionResult
from .drag_drop_mixin import DragDropMixin

logger = logging.getLogger(__name__)


IDLE_STYLE = """
    IconDropZone {
        border: 6px dashed palette(mid);
        border-radius: 12px;
    }
"""

TARGETED_STYLE = """
    IconDropZone {
        border: 6px dashed palette(highlight);
        border-radius: 12px;
        background-color: rgba(76, 175, 80, 0.2);
    }
"""


class IconDropZone(DragDropMixin, QWidget):
    """Square drop target showing the first icon and a count of the rest."""

    # Signals
    references_dropped = Signal(list)  # List[ItemReference]
    clear_requested = Signal()
    copy_requested = Signal()

    PLACEHOLDER_TEXT = "Drop Apps Here"
    TARGETED_TEXT = "Drop Now!"
    PROCESSING_TEXT = "Thinking Really Hard..."

    def __init__(self, parent=None, application_extensions=("app",)):
        super().__init__(parent)
        self._icon_count = 0
        self._first_pixmap = QPixmap()

        self._setup_ui()
        self._setup_context_menu()
        self.setup_drag_drop(application_extensions)

    def _setup_ui(self):
        """Setup the drop zone UI."""
        self.setAttribute(Qt.WA_StyledBackground, True)
        self.setStyleSheet(IDLE_STYLE)

        layout = QVBoxLayout(self)

        self.badge_label = QLabel()
        self.badge_label.setAlignment(Qt.AlignRight)
        self.badge_label.setVisible(False)
        layout.addWidget(self.badge_label)

        self.icon_label = QLabel(self.PLACEHOLDER_TEXT)
        self.icon_label.setAlignment(Qt.AlignCenter)
        self.icon_label.setMinimumSize(128, 128)
        layout.addWidget(self.icon_label, 1)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 1000)
        self.progress_bar.setTextVisible(False)
        self.progress_bar.setVisible(False)
        layout.addWidget(self.progress_bar)

        self.progress_label = QLabel(self.PROCESSING_TEXT)
        self.progress_label.setAlignment(Qt.AlignCenter)
        self.progress_label.setVisible(False)
        layout.addWidget(self.progress_label)

    def _setup_context_menu(self):
        """Setup clear and copy actions."""
        self.clear_action = QAction("Clear Images", self)
        self.clear_action.setShortcut(QKeySequence("Ctrl+K"))
        self.clear_action.triggered.connect(lambda: self.clear_requested.emit())
        self.addAction(self.clear_action)

        self.copy_action = QAction("Copy to Clipboard", self)
        self.copy_action.setShortcut(QKeySequence("Ctrl+C"))
        self.copy_action.triggered.connect(lambda: self.copy_requested.emit())
        self.addAction(self.copy_action)

        self.setContextMenuPolicy(Qt.CustomContextMenu)
        self.customContextMenuRequested.connect(self._show_context_menu)
        self._update_actions()

    def _show_context_menu(self, position):
        if not self._icon_count:
            return
        menu = QMenu(self)
        menu.addAction(self.clear_action)
        menu.addAction(self.copy_action)
        menu.exec(self.mapToGlobal(position))

    @property
    def icon_count(self) -> int:
        return self._icon_count

    def set_results(self, results: List[ExtractionResult]) -> None:
        """Show the first icon and a +N badge for the others."""
        self._icon_count = len(results)
        logger.debug(f"Showing {self._icon_count} icons")

        if results:
            self._first_pixmap = QPixmap.fromImage(results[0].icon.image)
            self.icon_label.setText("")
            self._update_icon_pixmap()
        else:
            self._first_pixmap = QPixmap()
            self.icon_label.setPixmap(QPixmap())
            self.icon_label.setText(self.PLACEHOLDER_TEXT)

        if self._icon_count > 1:
            self.badge_label.setText(f"+{self._icon_count - 1}")
            self.badge_label.setVisible(True)
        else:
            self.badge_label.setVisible(False)

        self._update_actions()

    def set_processing(self, processing: bool) -> None:
        self.progress_bar.setVisible(processing)
        self.progress_label.setVisible(processing)
        if processing:
            self.progress_bar.setValue(0)

    def set_progress(self, fraction: float) -> None:
        self.progress_bar.setValue(round(fraction * self.progress_bar.maximum()))

    def handle_dropped_references(self, references) -> None:
        self.references_dropped.emit(references)

    def drag_targeted_changed(self, targeted: bool) -> None:
        self.setStyleSheet(TARGETED_STYLE if targeted else IDLE_STYLE)
        if not self._icon_count:
            self.icon_label.setText(self.TARGETED_TEXT if targeted else self.PLACEHOLDER_TEXT)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._update_icon_pixmap()

    def _update_icon_pixmap(self):
        if self._first_pixmap.isNull():
            return
        self.icon_label.setPixmap(self._first_pixmap.scaled(
            self.icon_label.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation))

    def _update_actions(self):
        has_icons = self._icon_count > 0
        self.clear_action.setEnabled(has_icons)
        self.copy_action.setEnabled(has_icons)
