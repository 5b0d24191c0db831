"""
Configuration schema validation for Icon Copier.
"""

from typing import Dict, Any


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ConfigSchema:
    """Configuration schema validator."""

    @staticmethod
    def validate_config(config: Dict[str, Any]) -> None:
        """Validate complete configuration dictionary."""
        ConfigSchema._validate_paths(config.get("paths", {}))
        ConfigSchema._validate_icons(config.get("icons", {}))
        ConfigSchema._validate_ingestion(config.get("ingestion", {}))
        ConfigSchema._validate_performance(config.get("performance", {}))
        ConfigSchema._validate_export(config.get("export", {}))
        ConfigSchema._validate_ui(config.get("ui", {}))
        ConfigSchema._validate_logging(config.get("logging", {}))

    @staticmethod
    def _validate_paths(paths: Dict[str, Any]) -> None:
        """Validate paths configuration."""
        for path_key, path_value in paths.items():
            if not isinstance(path_value, str):
                raise ConfigValidationError(f"Path {path_key} must be a string")

    @staticmethod
    def _validate_icons(icons: Dict[str, Any]) -> None:
        """Validate icon extraction configuration."""
        if "dimensions" in icons:
            dimensions = icons["dimensions"]
            if isinstance(dimensions, bool) or not isinstance(dimensions, int) or dimensions < 1:
                raise ConfigValidationError("icons dimensions must be a positive integer")

        for key in ("image_extensions", "application_extensions"):
            if key in icons:
                extensions = icons[key]
                if not isinstance(extensions, list):
                    raise ConfigValidationError(f"icons {key} must be a list")
                for extension in extensions:
                    if not isinstance(extension, str) or not extension or extension.startswith('.'):
                        raise ConfigValidationError(
                            f"icons {key} entries must be extensions without a leading dot")

    @staticmethod
    def _validate_ingestion(ingestion: Dict[str, Any]) -> None:
        """Validate ingestion configuration."""
        if "type_identifiers" in ingestion:
            identifiers = ingestion["type_identifiers"]
            if not isinstance(identifiers, dict):
                raise ConfigValidationError("type_identifiers must be a dictionary")

            valid_groups = ["application", "file_url", "url_data"]
            for group, values in identifiers.items():
                if group not in valid_groups:
                    raise ConfigValidationError(f"Unknown type identifier group: {group}")
                if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                    raise ConfigValidationError(f"type_identifiers {group} must be a list of strings")

    @staticmethod
    def _validate_performance(performance: Dict[str, Any]) -> None:
        """Validate performance configuration."""
        if "max_concurrent_resolutions" in performance:
            max_threads = performance["max_concurrent_resolutions"]
            if not isinstance(max_threads, int) or max_threads < 1 or max_threads > 64:
                raise ConfigValidationError("max_concurrent_resolutions must be between 1 and 64")

        if "shutdown_timeout_ms" in performance:
            timeout = performance["shutdown_timeout_ms"]
            if not isinstance(timeout, int) or timeout < 0:
                raise ConfigValidationError("shutdown_timeout_ms must be a non-negative integer")

    @staticmethod
    def _validate_export(export: Dict[str, Any]) -> None:
        """Validate export configuration."""
        if "png_quality" in export:
            quality = export["png_quality"]
            if not isinstance(quality, int) or quality < -1 or quality > 100:
                raise ConfigValidationError("png_quality must be between -1 and 100")

        if "filename_template" in export:
            template = export["filename_template"]
            if not isinstance(template, str) or "{label}" not in template:
                raise ConfigValidationError("filename_template must be a string containing {label}")
            if not template.lower().endswith(".png"):
                raise ConfigValidationError("filename_template must end with .png")

        if "fallback_label_prefix" in export:
            prefix = export["fallback_label_prefix"]
            if not isinstance(prefix, str) or not prefix.strip():
                raise ConfigValidationError("fallback_label_prefix must be a non-empty string")

        for key in ("default_directory", "scratch_directory"):
            if key in export and not isinstance(export[key], str):
                raise ConfigValidationError(f"export {key} must be a string")

    @staticmethod
    def _validate_ui(ui: Dict[str, Any]) -> None:
        """Validate UI configuration."""
        if "theme" in ui:
            theme = ui["theme"]
            valid_themes = ["light", "dark", "auto"]
            if theme not in valid_themes:
                raise ConfigValidationError(f"theme must be one of: {valid_themes}")

        if "window_size" in ui:
            size = ui["window_size"]
            if not isinstance(size, int) or size < 200 or size > 2000:
                raise ConfigValidationError("window_size must be between 200 and 2000")

    @staticmethod
    def _validate_logging(logging_config: Dict[str, Any]) -> None:
        """Validate logging configuration."""
        if "level" in logging_config:
            level = logging_config["level"]
            valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
            if level not in valid_levels:
                raise ConfigValidationError(f"logging level must be one of: {valid_levels}")


def validate_user_config(config: Dict[str, Any]) -> None:
    """Validate user-specific configuration."""
    if "user_id" in config:
        user_id = config["user_id"]
        if not isinstance(user_id, str) or not user_id.strip():
            raise ConfigValidationError("user_id must be a non-empty string")

    if "export" in config:
        export = config["export"]
        if not isinstance(export, dict):
            raise ConfigValidationError("user export settings must be a dictionary")
