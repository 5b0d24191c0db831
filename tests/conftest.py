"""
Shared fixtures for Icon Copier tests.
"""

import json
import os
import time
from pathlib import Path

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QUrl  # noqa: E402
from PySide6.QtGui import QColor, QIcon, QImage, QPixmap  # noqa: E402

from icon_copier.config.defaults import FILE_URL_TYPE  # noqa: E402
from icon_copier.config.manager import ConfigurationManager  # noqa: E402
from icon_copier.core.references import ItemReference  # noqa: E402


class FakeItemReference(ItemReference):
    """Item reference with canned payloads, an optional URL and a load delay."""

    def __init__(self, payloads=None, url=None, delay=0.0, error=None):
        self.payloads = dict(payloads or {})
        self.url = url
        self.delay = delay
        self.error = error

    @property
    def type_identifiers(self):
        return frozenset(self.payloads)

    def load_item(self, type_identifier):
        self._wait()
        return self.payloads[type_identifier]

    def can_load_url(self):
        return self.url is not None

    def load_url(self):
        self._wait()
        return QUrl(self.url)

    def _wait(self):
        if self.delay > 0:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error


class FakeIconProvider:
    """Stands in for QFileIconProvider, which has no icons offscreen."""

    def __init__(self, size=64, color="green", null=False):
        self.size = size
        self.color = color
        self.null = null
        self.requested = []

    def icon(self, file_info):
        self.requested.append(file_info.absoluteFilePath())
        if self.null:
            return QIcon()
        pixmap = QPixmap(self.size, self.size)
        pixmap.fill(QColor(self.color))
        return QIcon(pixmap)


def solid_image(width, height, color="red"):
    image = QImage(width, height, QImage.Format_ARGB32)
    image.fill(QColor(color))
    return image


@pytest.fixture
def config_factory(tmp_path):
    """Build loaded configuration managers that keep all files under tmp_path."""

    def factory(overrides=None):
        general_config = {
            "paths": {
                "user_config_path": str(tmp_path / "config"),
                "log_directory": str(tmp_path / "logs"),
            },
            "logging": {"file_enabled": False},
            "export": {"scratch_directory": str(tmp_path / "scratch")},
        }
        for section, values in (overrides or {}).items():
            general_config.setdefault(section, {}).update(values)

        general_path = tmp_path / "global_config.json"
        general_path.write_text(json.dumps(general_config), encoding="utf-8")

        config_manager = ConfigurationManager()
        config_manager.load_configuration(
            general_config_path=str(general_path),
            user_config_path=str(tmp_path / "config" / "user_config.json"),
        )
        return config_manager

    return factory


@pytest.fixture
def config_manager(config_factory):
    return config_factory()


@pytest.fixture
def icon_provider():
    return FakeIconProvider()


@pytest.fixture
def make_png(tmp_path, qapp):
    """Write a solid-colour PNG and return its path."""

    def factory(name, width=32, height=32, color="red"):
        path = tmp_path / name
        assert solid_image(width, height, color).save(str(path), "PNG")
        return path

    return factory


@pytest.fixture
def make_bundle(tmp_path):
    """Create an application bundle directory and return its path."""

    def factory(name="Notes.app"):
        path = tmp_path / name
        (path / "Contents").mkdir(parents=True)
        return path

    return factory


def file_url_reference(path: Path, **kwargs) -> FakeItemReference:
    """Reference declaring only a file URL."""
    return FakeItemReference({FILE_URL_TYPE: QUrl.fromLocalFile(str(path))}, **kwargs)
