"""
Icon export for Icon Copier.

Writes rendered icons as PNG files, one at a time, in batches to a folder,
or to a scratch directory for sharing.
"""

import logging
import tempfile
from pathlib import Path
from typing import List, Optional, Sequence, Set, Tuple

from PySide6.QtCore import QMimeData, QObject, QStandardPaths, QUrl, Signal
from PySide6.QtGui import QClipboard, QGuiApplication

from ..config.manager import ConfigurationManager
from ..utils.file_utils import FileUtils
from .bitmap_renderer import BitmapRenderer
from .exceptions import ExportWriteError, IconCopierError
from .models import (
    BatchExportSummary, ExportFailure, ExportResult, ExportTarget,
    ExtractionResult, IconImage,
)


logger = logging.getLogger(__name__)

ExportItem = Tuple[IconImage, Optional[str]]


def export_items(results: Sequence[ExtractionResult]) -> List[ExportItem]:
    """Pair each extracted icon with its source label."""
    return [(result.icon, result.source_label) for result in results]


class ExportPipeline(QObject):
    """Renders icons to fixed-size PNG files."""

    # Signals
    export_completed = Signal(int, str)  # saved_count, folder_name
    item_export_failed = Signal(object)  # ExportFailure

    def __init__(self, config_manager: ConfigurationManager,
                 renderer: Optional[BitmapRenderer] = None):
        super().__init__()
        self.config_manager = config_manager
        self.renderer = renderer or BitmapRenderer(config_manager)

        self.filename_template = self.config_manager.get(
            'export.filename_template', "{label}_Icon_{size}x{size}.png")
        self.fallback_label_prefix = self.config_manager.get('export.fallback_label_prefix', "App")

        logger.info("ExportPipeline initialized")

    def source_label(self, index: int, label: Optional[str] = None) -> str:
        """Label for the item at a 0-based batch position."""
        if label:
            return label
        return f"{self.fallback_label_prefix}_{index + 1}"

    def suggested_filename(self, source_label: str, target_size: int) -> str:
        """File name for an exported icon, e.g. Notes_Icon_512x512.png."""
        safe_label = FileUtils.safe_filename(source_label)
        return self.filename_template.format(label=safe_label, size=int(target_size))

    def default_destination_directory(self) -> Path:
        """Directory save dialogs start in."""
        configured = self.config_manager.get('export.default_directory', "")
        if configured:
            return Path(configured).expanduser()

        downloads = QStandardPaths.writableLocation(QStandardPaths.DownloadLocation)
        if downloads:
            return Path(downloads)
        return Path.home()

    def export_one(self, icon: IconImage, source_label: str, target_size: int,
                   destination: Path) -> ExportResult:
        """
        Export a single icon to a caller-chosen file.

        Args:
            icon: Icon to export
            source_label: Label used in diagnostics
            target_size: Width and height of the PNG in pixels
            destination: Output file; ".png" is appended when missing

        Returns:
            ExportResult describing the written file or the failure
        """
        destination = FileUtils.with_suffix_appended(Path(destination), ".png")
        result = self._write_icon(icon, source_label, target_size, destination)
        if result.succeeded:
            logger.info(f"Icon saved to: {destination}")
        return result

    def export_batch(self, items: Sequence[ExportItem], target_size: int,
                     destination_folder: Path) -> BatchExportSummary:
        """
        Export icons into a folder, one PNG per icon.

        A failing item is recorded and skipped; the remaining items are still
        exported. Items sharing a label get numbered names, e.g.
        Notes_2_Icon_512x512.png. Emits export_completed once for the whole
        batch.
        """
        destination_folder = Path(destination_folder)
        summary = BatchExportSummary(destination=destination_folder)
        used_names: Set[str] = set()
        FileUtils.ensure_directory(destination_folder)

        for index, (icon, label) in enumerate(items):
            label = self.source_label(index, label)
            file_path = destination_folder / self._batch_filename(label, target_size, used_names)

            result = self._write_icon(icon, label, target_size, file_path)
            if result.succeeded:
                summary.saved_paths.append(file_path)
            else:
                summary.failures.append(result.failure)

        logger.info(f"Saved {summary.saved_count} of {len(items)} icons to {destination_folder}")
        if summary.failures:
            logger.warning(f"{len(summary.failures)} icons could not be saved")

        self.export_completed.emit(summary.saved_count, destination_folder.name)
        return summary

    def export_for_sharing(self, items: Sequence[ExportItem], target_size: int,
                           scratch_directory: Optional[Path] = None) -> List[Path]:
        """
        Write temporary PNGs to hand over to a sharing facility.

        Returns:
            Paths of the files written; failed items are left out
        """
        if scratch_directory is None:
            configured = self.config_manager.get('export.scratch_directory', "")
            scratch_directory = Path(configured) if configured else Path(tempfile.gettempdir())
        scratch_directory = Path(scratch_directory)
        FileUtils.ensure_directory(scratch_directory)

        shared_paths = []
        used_names: Set[str] = set()
        for index, (icon, label) in enumerate(items):
            label = self.source_label(index, label)
            file_path = scratch_directory / self._batch_filename(label, target_size, used_names)
            if self._write_icon(icon, label, target_size, file_path).succeeded:
                shared_paths.append(file_path)

        logger.debug(f"Prepared {len(shared_paths)} icons for sharing in {scratch_directory}")
        return shared_paths

    def copy_to_clipboard(self, items: Sequence[ExportItem], target_size: int,
                          clipboard: Optional[QClipboard] = None) -> bool:
        """
        Put the icons on the clipboard.

        A clipboard holds a single image, so the first icon is placed as
        image data. Every icon is also written to the scratch directory and
        offered as a PNG file URL, which file managers paste as files.
        """
        if not items:
            return False

        mime_data = QMimeData()
        mime_data.setImageData(items[0][0].image)

        paths = self.export_for_sharing(items, target_size)
        if paths:
            mime_data.setUrls([QUrl.fromLocalFile(str(path)) for path in paths])

        clipboard = clipboard or QGuiApplication.clipboard()
        clipboard.setMimeData(mime_data)

        logger.info(f"Copied {len(paths)} of {len(items)} icons to clipboard")
        return True

    def _batch_filename(self, label: str, target_size: int, used_names: Set[str]) -> str:
        """Suggested file name, numbered when an earlier item of the batch took it."""
        filename = self.suggested_filename(label, target_size)
        counter = 2
        while filename.lower() in used_names:
            filename = self.suggested_filename(f"{label}_{counter}", target_size)
            counter += 1
        used_names.add(filename.lower())
        return filename

    def _write_icon(self, icon: IconImage, source_label: str, target_size: int,
                    file_path: Path) -> ExportResult:
        """Render, encode and write one icon."""
        target = ExportTarget(file_path)
        try:
            bitmap = self.renderer.render(icon, target_size)
            png_data = self.renderer.encode_png(bitmap)
            try:
                file_path.write_bytes(png_data)
            except OSError as e:
                raise ExportWriteError(f"Cannot write {file_path}: {e}") from e
        except IconCopierError as e:
            failure = ExportFailure(source_label, file_path, e.reason, str(e))
            logger.error(f"Error saving icon {source_label}: {e}")
            self.item_export_failed.emit(failure)
            return ExportResult(target, failure)

        logger.debug(f"Wrote {file_path}")
        return ExportResult(target)
