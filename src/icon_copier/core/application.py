"""
Main application class for Icon Copier.
"""

import logging
import sys
from typing import Optional

from PySide6.QtWidgets import QApplication, QMessageBox
from PySide6.QtCore import QObject, Signal

from ..config.manager import ConfigurationManager
from ..ui.main_window import MainWindow
from .export_pipeline import ExportPipeline
from .icon_extractor import IconExtractor
from .ingestion_coordinator import IconIngestionCoordinator
from .references import ReferenceClassifier


logger = logging.getLogger(__name__)


class IconCopierApp(QObject):
    """
    Application controller for Icon Copier.

    Owns the session's coordinator and export pipeline and hands them to
    the window explicitly.
    """

    # Signals
    application_started = Signal()
    application_closing = Signal()

    def __init__(self, qt_app: QApplication, config_manager: ConfigurationManager):
        super().__init__()

        self.qt_app = qt_app
        self.config_manager = config_manager

        # Core components
        self.coordinator: Optional[IconIngestionCoordinator] = None
        self.export_pipeline: Optional[ExportPipeline] = None

        # UI
        self.main_window: Optional[MainWindow] = None

        self.qt_app.aboutToQuit.connect(self._on_application_quit)

        try:
            self._initialize_components()
        except Exception as e:
            self._show_error_dialog("Initialization Error",
                                    f"Failed to initialize Icon Copier:\n{e}")
            sys.exit(1)

    def _initialize_components(self) -> None:
        """Initialize the ingestion and export pipelines."""
        logger.info("Initializing Icon Copier components...")

        self.coordinator = IconIngestionCoordinator(
            config_manager=self.config_manager,
            extractor=IconExtractor(self.config_manager),
            classifier=ReferenceClassifier(self.config_manager),
        )
        self.export_pipeline = ExportPipeline(config_manager=self.config_manager)

        logger.info("Component initialization completed")

    def show_main_window(self) -> None:
        """Create and show the main application window."""
        self.main_window = MainWindow(self)
        self.main_window.show()
        self.application_started.emit()

    def _on_application_quit(self) -> None:
        """Handle application quit event."""
        self.application_closing.emit()

        if self.coordinator:
            self.coordinator.shutdown()

    def _show_error_dialog(self, title: str, message: str) -> None:
        """Show error dialog to user."""
        msg_box = QMessageBox()
        msg_box.setIcon(QMessageBox.Critical)
        msg_box.setWindowTitle(title)
        msg_box.setText(message)
        msg_box.setStandardButtons(QMessageBox.Ok)
        msg_box.exec()
