"""
Default configuration values for Icon Copier.
"""

import os
from pathlib import Path

# Get platform-specific default paths
def get_default_paths():
    """Get platform-specific default paths."""
    home = Path.home()

    if os.name == 'nt':  # Windows
        app_data = Path(os.environ.get('APPDATA', home / 'AppData' / 'Roaming'))
        return {
            'config_dir': app_data / 'IconCopier',
            'log_dir': app_data / 'IconCopier' / 'logs',
        }
    else:  # Linux/macOS
        config_dir = home / '.icon_copier'
        return {
            'config_dir': config_dir,
            'log_dir': config_dir / 'logs',
        }

# Get default paths
_default_paths = get_default_paths()

# Type identifiers advertised by drag sources
APPLICATION_FILE_TYPE = "com.apple.application-file"
FILE_URL_TYPE = "public.file-url"
URI_LIST_TYPE = "text/uri-list"

DEFAULT_CONFIG = {
    "version": "1.0.0",
    "paths": {
        "user_config_path": str(_default_paths['config_dir']),
        "log_directory": str(_default_paths['log_dir']),
    },
    "config_files": {
        "general_config_file": str(_default_paths['config_dir'] / "global_config.json"),
        "user_config_file": str(_default_paths['config_dir'] / "user_config.json"),
        # Whether to create the user config file if it doesn't exist
        "auto_create": True,
    },
    "icons": {
        "dimensions": 1024,  # Logical and exported size in pixels
        "image_extensions": ["png", "jpg", "jpeg", "gif", "bmp", "tiff"],
        "application_extensions": ["app"],
    },
    "ingestion": {
        "type_identifiers": {
            # Checked in this order: application, URL object, file_url, url_data
            "application": [APPLICATION_FILE_TYPE],
            "file_url": [FILE_URL_TYPE],
            "url_data": [URI_LIST_TYPE],
        },
    },
    "performance": {
        "max_concurrent_resolutions": 4,
        "shutdown_timeout_ms": 5000,
    },
    "export": {
        "png_quality": 100,
        "filename_template": "{label}_Icon_{size}x{size}.png",
        "fallback_label_prefix": "App",
        "default_directory": "",  # Empty means the user's Downloads folder
        "scratch_directory": "",  # Empty means the system temp directory
        "notify_on_completion": True,
    },
    "ui": {
        "window_size": 420,
        "theme": "auto",
    },
    "logging": {
        "level": "INFO", # "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
        "file_enabled": True,
        "file_path": str(_default_paths['log_dir'] / 'icon_copier.log'),
        "console_enabled": True,
    },
}
