"""
Theme utilities for Icon Copier.
"""

import logging
from typing import Dict

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication

logger = logging.getLogger(__name__)


DARK_COLORS: Dict[QPalette.ColorRole, str] = {
    QPalette.Window: "#2b2b2b",
    QPalette.WindowText: "#e0e0e0",
    QPalette.Base: "#1e1e1e",
    QPalette.AlternateBase: "#323232",
    QPalette.Text: "#e0e0e0",
    QPalette.Button: "#353535",
    QPalette.ButtonText: "#e0e0e0",
    QPalette.Highlight: "#4caf50",
    QPalette.HighlightedText: "#ffffff",
    QPalette.Mid: "#5a5a5a",
}


def apply_theme(app: QApplication, theme: str = "auto") -> None:
    """
    Apply a light or dark palette.

    "auto" keeps the platform palette so the window follows the system
    appearance.
    """
    if theme == "auto":
        logger.debug("Using platform palette")
        return

    app.setStyle("Fusion")
    palette = app.style().standardPalette()
    if theme == "dark":
        for role, color in DARK_COLORS.items():
            palette.setColor(role, QColor(color))
    app.setPalette(palette)
    logger.debug(f"Applied {theme} theme")
