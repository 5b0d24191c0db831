#!/usr/bin/env python3
"""
Main entry point for Icon Copier application.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QApplication

from .config.defaults import DEFAULT_CONFIG
from .config.manager import ConfigurationManager
from .core.application import IconCopierApp
from .ui.theme_utils import apply_theme

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(logging_config: Optional[Dict[str, Any]] = None) -> None:
    """Configure console and file logging from a 'logging' config section."""
    if logging_config is None:
        logging_config = DEFAULT_CONFIG['logging']

    handlers = []
    if logging_config.get('console_enabled', True):
        handlers.append(logging.StreamHandler(sys.stdout))
    if logging_config.get('file_enabled', True):
        log_path = Path(logging_config.get('file_path', 'icon_copier.log'))
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_path)))

    logging.basicConfig(
        level=getattr(logging, logging_config.get('level', 'INFO').upper()),
        format=LOG_FORMAT,
        handlers=handlers or [logging.StreamHandler(sys.stdout)],
        force=True,
    )


def setup_qt_application() -> QApplication:
    app = QApplication(sys.argv)
    app.setApplicationName("Icon Copier")
    app.setApplicationVersion("1.0.0")
    app.setOrganizationName("Icon Copier")

    icon_path = Path(__file__).parent / "resources" / "icons" / "app_icon.png"
    if icon_path.exists():
        app.setWindowIcon(QIcon(str(icon_path)))
    return app


def find_config_files() -> Tuple[str, str]:
    """
    Locate global_config.json and user_config.json.

    The working directory is searched before the configuration directory;
    when neither holds a file the default location is returned so the user
    file can be created there.
    """
    config_files = DEFAULT_CONFIG['config_files']
    defaults = {
        'global_config.json': Path(config_files['general_config_file']),
        'user_config.json': Path(config_files['user_config_file']),
    }

    found = {}
    for name, default_path in defaults.items():
        candidates = [Path.cwd() / name, default_path]
        found[name] = next((path for path in candidates if path.exists()), default_path)

    return str(found['global_config.json']), str(found['user_config.json'])


def main() -> int:
    """Main application entry point."""
    setup_logging()
    try:
        logger.info("Starting Icon Copier...")
        qt_app = setup_qt_application()

        general_config, user_config = find_config_files()
        logger.info(f"Configuration files: general={general_config}, user={user_config}")

        config_manager = ConfigurationManager()
        config_manager.load_configuration(
            general_config_path=general_config,
            user_config_path=user_config,
        )
        logging.getLogger().setLevel(config_manager.get('logging.level', 'INFO'))
        apply_theme(qt_app, config_manager.get('ui.theme', 'auto'))

        app = IconCopierApp(qt_app, config_manager)
        app.show_main_window()
        logger.info("Icon Copier started successfully")

        return qt_app.exec()

    except Exception as e:
        logger.error(f"Failed to start Icon Copier: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
