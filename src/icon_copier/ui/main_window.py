"""
Main window for Icon Copier.
"""

import logging
from pathlib import Path
from typing import List

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout,
    QPushButton, QFileDialog, QSystemTrayIcon, QApplication
)
from PySide6.QtCore import QMimeData, QUrl, Slot
from PySide6.QtGui import QAction, QDesktopServices, QIcon, QKeySequence

from ..core.export_pipeline import export_items
from ..core.models import ExtractionResult
from .drop_zone import IconDropZone

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main application window: a drop zone with save and share buttons."""

    def __init__(self, app_controller):
        super().__init__()
        self.app_controller = app_controller
        self.config = app_controller.config_manager
        self.coordinator = app_controller.coordinator
        self.export_pipeline = app_controller.export_pipeline

        self.icon_dimensions = self.config.get('icons.dimensions', 1024)
        self._results: List[ExtractionResult] = []
        self._last_saved_folder = None
        self.tray_icon = None

        self.setWindowTitle("Icon Copier")
        size = self.config.get('ui.window_size', 420)
        self.setFixedSize(size, size + 60)

        self._setup_ui()
        self._setup_menus()
        self._setup_notifications()
        self._connect_signals()

        logger.info("MainWindow initialized")

    def _setup_ui(self):
        """Setup the main UI layout."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)

        main_layout = QVBoxLayout(central_widget)

        self.drop_zone = IconDropZone(
            self, self.config.get('icons.application_extensions', ["app"]))
        main_layout.addWidget(self.drop_zone, 1)

        button_layout = QHBoxLayout()
        self.share_button = QPushButton("Share Icons")
        self.share_button.setIcon(QIcon.fromTheme("document-send"))
        self.share_button.clicked.connect(self.share_icons)
        button_layout.addWidget(self.share_button)

        self.save_button = QPushButton("Save Icons")
        self.save_button.setIcon(QIcon.fromTheme("document-save"))
        self.save_button.clicked.connect(self.save_icons)
        button_layout.addWidget(self.save_button)

        main_layout.addLayout(button_layout)
        self._update_buttons()

    def _setup_menus(self):
        """Setup application menus."""
        edit_menu = self.menuBar().addMenu("&Edit")
        edit_menu.addAction(self.drop_zone.copy_action)
        edit_menu.addAction(self.drop_zone.clear_action)

        file_menu = self.menuBar().addMenu("&File")
        exit_action = QAction("E&xit", self)
        exit_action.setShortcut(QKeySequence.Quit)
        exit_action.triggered.connect(self.close)
        file_menu.addAction(exit_action)

    def _setup_notifications(self):
        """Setup the tray icon used for save notifications."""
        if not self.config.get('export.notify_on_completion', True):
            return
        if not QSystemTrayIcon.isSystemTrayAvailable():
            logger.debug("System tray not available, notifications go to the status bar")
            return

        self.tray_icon = QSystemTrayIcon(QApplication.windowIcon(), self)
        self.tray_icon.messageClicked.connect(self._show_last_saved_folder)
        self.tray_icon.show()

    def _connect_signals(self):
        """Connect drop zone, coordinator and export signals."""
        self.drop_zone.references_dropped.connect(self._on_references_dropped)
        self.drop_zone.clear_requested.connect(self.coordinator.clear_results)
        self.drop_zone.copy_requested.connect(self.copy_to_clipboard)

        self.coordinator.processing_changed.connect(self.drop_zone.set_processing)
        self.coordinator.progress_changed.connect(self.drop_zone.set_progress)
        self.coordinator.subscribe(self._on_results_published)

        self.export_pipeline.export_completed.connect(self._on_export_completed)

    @Slot(list)
    def _on_references_dropped(self, references):
        if not self.coordinator.ingest(references):
            self.statusBar().showMessage("Still processing the previous drop", 3000)

    @Slot(list)
    def _on_results_published(self, results):
        self._results = list(results)
        self.drop_zone.set_results(self._results)
        self._update_buttons()

        report = self.coordinator.last_report
        if results and report and report.failures:
            skipped = len(report.failures)
            self.statusBar().showMessage(
                f"{skipped} dropped item{'s' if skipped != 1 else ''} skipped", 5000)

    def _update_buttons(self):
        count = len(self._results)
        self.save_button.setEnabled(count > 0)
        self.share_button.setEnabled(count > 0)
        self.save_button.setText("Save Icon" if count == 1 else "Save Icons")
        self.share_button.setText("Share Icon" if count == 1 else "Share Icons")

    def save_icons(self):
        """Save one icon to a chosen file, or all icons to a chosen folder."""
        if not self._results:
            return

        start_directory = self.export_pipeline.default_destination_directory()

        if len(self._results) == 1:
            result = self._results[0]
            suggested = self.export_pipeline.suggested_filename(
                result.source_label, self.icon_dimensions)
            file_path, _ = QFileDialog.getSaveFileName(
                self, "Save Icon", str(start_directory / suggested), "PNG Image (*.png)")
            if not file_path:
                return
            outcome = self.export_pipeline.export_one(
                result.icon, result.source_label, self.icon_dimensions, Path(file_path))
            if outcome.succeeded:
                self.statusBar().showMessage(f"Icon saved to {outcome.target.path}", 5000)
            else:
                self.statusBar().showMessage(f"Could not save icon: {outcome.failure.message}", 5000)
            return

        folder = QFileDialog.getExistingDirectory(
            self, "Choose Folder for Icons", str(start_directory))
        if not folder:
            return
        self._last_saved_folder = Path(folder)
        self.export_pipeline.export_batch(
            export_items(self._results), self.icon_dimensions, Path(folder))

    def share_icons(self):
        """Write temporary PNGs and put them on the clipboard as files."""
        if not self._results:
            return

        paths = self.export_pipeline.export_for_sharing(
            export_items(self._results), self.icon_dimensions)
        if not paths:
            self.statusBar().showMessage("Could not prepare icons for sharing", 5000)
            return

        mime_data = QMimeData()
        mime_data.setUrls([QUrl.fromLocalFile(str(path)) for path in paths])
        QApplication.clipboard().setMimeData(mime_data)
        self.statusBar().showMessage(
            f"{len(paths)} icon file{'s' if len(paths) != 1 else ''} ready to paste", 5000)

    def copy_to_clipboard(self):
        if self.export_pipeline.copy_to_clipboard(export_items(self._results), self.icon_dimensions):
            self.statusBar().showMessage("Copied to clipboard", 3000)

    @Slot(int, str)
    def _on_export_completed(self, saved_count: int, folder_name: str):
        title = "Icons Saved Successfully"
        body = f"Saved {saved_count} icon{'' if saved_count == 1 else 's'} to {folder_name}"

        if self.tray_icon is not None:
            self.tray_icon.showMessage(title, body, QSystemTrayIcon.Information)
        self.statusBar().showMessage(body, 5000)

    def _show_last_saved_folder(self):
        if self._last_saved_folder is not None:
            QDesktopServices.openUrl(QUrl.fromLocalFile(str(self._last_saved_folder)))

    def closeEvent(self, event):
        if self.tray_icon is not None:
            self.tray_icon.hide()
        super().closeEvent(event)
