"""
Configuration manager for Icon Copier.

Settings are layered, later layers winning:
Defaults -> General Config -> User Config

The general config is shared, so a broken one stops the application; a
broken user config is skipped with a warning.
"""

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Dict, Optional

from .defaults import DEFAULT_CONFIG
from .schemas import ConfigSchema, ConfigValidationError, validate_user_config


logger = logging.getLogger(__name__)

_NOT_LOADED = "Configuration not loaded. Call load_configuration() first."


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Merge override into base in place, descending into nested dictionaries."""
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            deep_merge(current, value)
        else:
            base[key] = deepcopy(value)


def read_json_object(path: Path) -> Dict[str, Any]:
    """
    Read a configuration file.

    Raises:
        ConfigValidationError: If the file is unreadable, is not JSON, or
            does not hold a JSON object
    """
    try:
        with path.open('r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigValidationError(f"Invalid JSON in config file {path}: {e}") from e
    except OSError as e:
        raise ConfigValidationError(f"Cannot read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigValidationError(f"Configuration file must contain a JSON object: {path}")
    return data


class ConfigurationManager:
    """Holds the merged settings and persists the user's own choices."""

    # Dot-notation keys written back to the user config file
    USER_SPECIFIC_KEYS = (
        'icons.dimensions',
        'export.default_directory',
        'export.notify_on_completion',
        'ui',
        'logging.level',
    )

    def __init__(self):
        self._config: Dict[str, Any] = {}
        self._config_paths: Dict[str, Path] = {}
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load_configuration(
        self,
        general_config_path: Optional[str] = None,
        user_config_path: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Build the effective configuration from the defaults and both files.

        Missing files are fine; the user file is created on first load.

        Returns:
            The merged configuration dictionary

        Raises:
            ConfigValidationError: If the general file is broken or the
                merged result is invalid
        """
        config = deepcopy(DEFAULT_CONFIG)
        self._config_paths = {
            name: Path(path)
            for name, path in (('general', general_config_path), ('user', user_config_path))
            if path
        }

        general_path = self._config_paths.get('general')
        if general_path is not None and general_path.exists():
            deep_merge(config, read_json_object(general_path))
            logger.info(f"Loaded general configuration from: {general_path}")

        user_path = self._config_paths.get('user')
        if user_path is not None and user_path.exists():
            try:
                user_config = read_json_object(user_path)
                validate_user_config(user_config)
            except ConfigValidationError as e:
                logger.warning(f"Ignoring user configuration: {e}")
            else:
                deep_merge(config, user_config)
                logger.info(f"Loaded user configuration from: {user_path}")

        ConfigSchema.validate_config(config)

        self._config = config
        self._loaded = True

        self._create_directories()
        self.ensure_config_files_exist()

        logger.debug(f"Configuration ready (icon size {self.get('icons.dimensions')})")
        return self._config

    def reload_configuration(self) -> None:
        """Load again from the files used last time."""
        if not self._loaded:
            logger.warning("Cannot reload configuration - not initially loaded")
            return

        paths = {name: str(path) for name, path in self._config_paths.items()}
        self.load_configuration(
            general_config_path=paths.get('general'),
            user_config_path=paths.get('user'),
        )

    def get(self, key: str, default: Any = None) -> Any:
        """
        Look up a value by dot-notation key, e.g. 'export.png_quality'.

        Raises:
            RuntimeError: If configuration not loaded
        """
        if not self._loaded:
            raise RuntimeError(_NOT_LOADED)

        node: Any = self._config
        for part in key.split('.'):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any, persist: bool = True) -> None:
        """
        Change a value, creating intermediate sections as needed.

        With persist, the user-specific keys are written to the user file.

        Raises:
            RuntimeError: If configuration not loaded
        """
        if not self._loaded:
            raise RuntimeError(_NOT_LOADED)

        *sections, leaf = key.split('.')
        node = self._config
        for section in sections:
            node = node.setdefault(section, {})
        node[leaf] = value
        logger.debug(f"Set configuration: {key} = {value}")

        if persist and 'user' in self._config_paths:
            try:
                self._save_user_config()
            except OSError as e:
                logger.warning(f"Failed to persist configuration: {e}")

    def get_config_info(self) -> Dict[str, Any]:
        return {
            'loaded': self._loaded,
            'config_paths': {name: str(path) for name, path in self._config_paths.items()},
            'version': self.get('version') if self._loaded else None,
        }

    def ensure_config_files_exist(self) -> None:
        """Write the user config file when it is missing and auto-creation is on."""
        user_path = self._config_paths.get('user')
        if user_path is None or user_path.exists():
            return
        if not self.get('config_files.auto_create', True):
            logger.debug("Auto-creation of config files is disabled")
            return

        try:
            self._save_user_config()
        except OSError as e:
            logger.error(f"Failed to create user config {user_path}: {e}")

    def _create_directories(self) -> None:
        directories = [self.get('paths.user_config_path')]
        if self.get('logging.file_enabled', False):
            directories.append(self.get('paths.log_directory'))

        for directory in filter(None, directories):
            try:
                Path(directory).mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.warning(f"Cannot create directory {directory}: {e}")

    def _save_user_config(self) -> None:
        """Merge the user-specific settings into the user file, keeping its other entries."""
        user_path = self._config_paths['user']

        stored: Dict[str, Any] = {}
        if user_path.exists():
            try:
                stored = read_json_object(user_path)
            except ConfigValidationError as e:
                logger.warning(f"Overwriting unreadable user config: {e}")

        deep_merge(stored, self._user_settings())

        user_path.parent.mkdir(parents=True, exist_ok=True)
        with user_path.open('w', encoding='utf-8') as f:
            json.dump(stored, f, indent=2, ensure_ascii=False)
        logger.info(f"Saved user configuration to: {user_path}")

    def _user_settings(self) -> Dict[str, Any]:
        settings: Dict[str, Any] = {}
        for key in self.USER_SPECIFIC_KEYS:
            value = self.get(key)
            if value is None:
                continue
            *sections, leaf = key.split('.')
            node = settings
            for section in sections:
                node = node.setdefault(section, {})
            node[leaf] = deepcopy(value)
        return settings
