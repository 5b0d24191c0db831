"""
Tests for icon extraction.
"""

from pathlib import Path

import pytest
from PySide6.QtCore import QSize

from icon_copier.core.exceptions import FailureReason, IconExtractionError
from icon_copier.core.bitmap_renderer import BitmapRenderer
from icon_copier.core.icon_extractor import IconExtractor
from icon_copier.core.models import FileCategory, ResolvedFile

from conftest import FakeIconProvider


@pytest.fixture
def extractor(config_manager, icon_provider, qapp):
    return IconExtractor(config_manager, icon_provider=icon_provider)


@pytest.mark.parametrize("name, category", [
    ("Notes.app", FileCategory.APPLICATION_BUNDLE),
    ("Safari.APP", FileCategory.APPLICATION_BUNDLE),
    ("photo.png", FileCategory.IMAGE_FILE),
    ("Scan.JPEG", FileCategory.IMAGE_FILE),
    ("report.pdf", FileCategory.GENERIC_FILE),
    ("Makefile", FileCategory.GENERIC_FILE),
])
def test_categorize(extractor, name, category):
    assert extractor.categorize(ResolvedFile(Path("/tmp") / name)) is category


def test_image_file_is_its_own_icon(extractor, make_png, icon_provider):
    path = make_png("photo.png", width=300, height=200)

    icon = extractor.extract(ResolvedFile(path), 1024)

    assert icon.category is FileCategory.IMAGE_FILE
    assert icon.pixel_size == QSize(300, 200)
    assert icon.logical_size == QSize(1024, 1024)
    assert icon.source_path == path
    assert icon_provider.requested == []


def test_application_bundle_uses_platform_icon(extractor, make_bundle, icon_provider):
    bundle = make_bundle("Notes.app")

    icon = extractor.extract(ResolvedFile(bundle), 512)

    assert icon.category is FileCategory.APPLICATION_BUNDLE
    assert not icon.image.isNull()
    assert icon.logical_size == QSize(512, 512)
    assert icon_provider.requested == [str(bundle)]


def test_generic_file_uses_platform_icon(extractor, tmp_path):
    document = tmp_path / "notes.txt"
    document.write_text("hello")

    icon = extractor.extract(ResolvedFile(document), 128)

    assert icon.category is FileCategory.GENERIC_FILE
    assert not icon.image.isNull()


def test_missing_file(extractor, tmp_path):
    with pytest.raises(IconExtractionError) as exc_info:
        extractor.extract(ResolvedFile(tmp_path / "Gone.app"), 1024)

    assert exc_info.value.reason is FailureReason.EXTRACTION_UNAVAILABLE


def test_corrupt_image(extractor, tmp_path):
    broken = tmp_path / "broken.png"
    broken.write_bytes(b"definitely not a png")

    with pytest.raises(IconExtractionError, match="Cannot read image"):
        extractor.extract(ResolvedFile(broken), 1024)


def test_null_platform_icon(config_manager, make_bundle, qapp):
    extractor = IconExtractor(config_manager, icon_provider=FakeIconProvider(null=True))

    with pytest.raises(IconExtractionError, match="No platform icon"):
        extractor.extract(ResolvedFile(make_bundle()), 1024)


@pytest.mark.parametrize("size", [0, -1, True])
def test_invalid_size(extractor, make_png, size):
    with pytest.raises(IconExtractionError):
        extractor.extract(ResolvedFile(make_png("a.png")), size)


def test_small_platform_icon_fills_rendered_canvas(extractor, config_manager, make_bundle):
    icon = extractor.extract(ResolvedFile(make_bundle("Notes.app")), 1024)

    pixels = BitmapRenderer(config_manager).render(icon, 1024).to_array()

    assert icon.pixel_size == QSize(64, 64)
    assert pixels[512, 512, 3] == 255
    assert pixels[1000, 1000, 3] == 255
