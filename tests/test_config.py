"""
Tests for configuration management.
"""

import json
import tempfile
from pathlib import Path
import pytest

from icon_copier.config.manager import ConfigurationManager
from icon_copier.config.schemas import ConfigSchema, ConfigValidationError


class TestConfigurationManager:
    """Test configuration manager functionality."""

    def test_load_default_configuration(self, config_manager):
        """Test loading default configuration."""
        assert config_manager.get('version') == '1.0.0'
        assert config_manager.get('icons.dimensions') == 1024
        assert config_manager.get('performance.max_concurrent_resolutions') == 4
        assert config_manager.get('ingestion.type_identifiers.application') == [
            "com.apple.application-file"]

    def test_cascading_configuration(self):
        """Test cascading configuration loading."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)

            general_config = {
                "paths": {"user_config_path": str(temp_path / "config")},
                "logging": {"file_enabled": False},
                "icons": {"dimensions": 256},
                "export": {"fallback_label_prefix": "Item"},
            }
            user_config = {
                "icons": {"dimensions": 512},  # Override general
                "ui": {"theme": "dark"},
            }

            general_path = temp_path / "general.json"
            user_path = temp_path / "user.json"

            with open(general_path, 'w') as f:
                json.dump(general_config, f)
            with open(user_path, 'w') as f:
                json.dump(user_config, f)

            config_manager = ConfigurationManager()
            config_manager.load_configuration(
                general_config_path=str(general_path),
                user_config_path=str(user_path)
            )

            # Test cascading: user > general > default
            assert config_manager.get('icons.dimensions') == 512  # From user
            assert config_manager.get('ui.theme') == 'dark'  # From user
            assert config_manager.get('export.fallback_label_prefix') == 'Item'  # From general
            assert config_manager.get('export.png_quality') == 100  # From defaults

    def test_get_with_dot_notation(self, config_manager):
        """Test getting configuration values with dot notation."""
        assert config_manager.get('export.filename_template') == "{label}_Icon_{size}x{size}.png"
        assert config_manager.get('ui.theme') == 'auto'

        # Test non-existing keys
        assert config_manager.get('nonexistent.key') is None
        assert config_manager.get('nonexistent.key', 'default') == 'default'

    def test_set_configuration_value(self, config_manager):
        """Test setting configuration values."""
        config_manager.set('test.key', 'test_value', persist=False)
        assert config_manager.get('test.key') == 'test_value'

        config_manager.set('nested.deep.key', 42, persist=False)
        assert config_manager.get('nested.deep.key') == 42

    def test_set_persists_user_settings(self, config_manager, tmp_path):
        """Test that user-specific keys are written to the user config file."""
        config_manager.set('icons.dimensions', 256)

        user_path = tmp_path / "config" / "user_config.json"
        saved = json.loads(user_path.read_text(encoding='utf-8'))
        assert saved['icons']['dimensions'] == 256
        assert 'performance' not in saved

    def test_user_config_created_on_load(self, config_manager, tmp_path):
        """Test the user config file is created when missing."""
        assert (tmp_path / "config" / "user_config.json").exists()

    def test_invalid_configuration(self):
        """Test handling of invalid configuration."""
        with tempfile.TemporaryDirectory() as temp_dir:
            temp_path = Path(temp_dir)

            invalid_path = temp_path / "invalid.json"
            with open(invalid_path, 'w') as f:
                f.write("{ invalid json }")

            config_manager = ConfigurationManager()

            with pytest.raises(ConfigValidationError):
                config_manager.load_configuration(general_config_path=str(invalid_path))

    def test_invalid_user_configuration_is_ignored(self, tmp_path):
        """Test a broken user config falls back to the other layers."""
        general_path = tmp_path / "general.json"
        general_path.write_text(json.dumps({
            "paths": {"user_config_path": str(tmp_path / "config")},
            "logging": {"file_enabled": False},
        }))
        user_path = tmp_path / "user.json"
        user_path.write_text("not json")

        config_manager = ConfigurationManager()
        config_manager.load_configuration(
            general_config_path=str(general_path),
            user_config_path=str(user_path),
        )

        assert config_manager.get('icons.dimensions') == 1024

    def test_configuration_not_loaded_error(self):
        """Test error when accessing configuration before loading."""
        config_manager = ConfigurationManager()

        with pytest.raises(RuntimeError, match="Configuration not loaded"):
            config_manager.get('some.key')

        with pytest.raises(RuntimeError, match="Configuration not loaded"):
            config_manager.set('some.key', 'value')


class TestConfigSchema:
    """Test configuration validation."""

    @pytest.mark.parametrize("section, values", [
        ("icons", {"dimensions": 0}),
        ("icons", {"image_extensions": [".png"]}),
        ("ingestion", {"type_identifiers": {"folder": ["public.folder"]}}),
        ("performance", {"max_concurrent_resolutions": 0}),
        ("export", {"filename_template": "icon.png"}),
        ("export", {"filename_template": "{label}.jpg"}),
        ("ui", {"theme": "purple"}),
        ("logging", {"level": "VERBOSE"}),
    ])
    def test_rejects_invalid_values(self, section, values):
        with pytest.raises(ConfigValidationError):
            ConfigSchema.validate_config({section: values})

    def test_accepts_defaults(self):
        from icon_copier.config.defaults import DEFAULT_CONFIG
        ConfigSchema.validate_config(DEFAULT_CONFIG)
