"""
Concurrent ingestion of dropped items for Icon Copier.

Each dropped item is classified and resolved on a worker thread. Outcomes
are handed back to the coordinator's thread, where the icon is extracted
and the batch accumulator is updated. Results are published once, after
every item of the batch has completed.
"""

import logging
import threading
from typing import Callable, Iterable, List, Optional, Tuple

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Qt, Signal, Slot

from ..config.manager import ConfigurationManager
from .exceptions import FailureReason, IconExtractionError, ReferenceResolutionError
from .icon_extractor import IconExtractor
from .models import ExtractionResult, IngestionReport, ItemFailure, ResolvedFile
from .references import ItemReference, ReferenceClassifier


logger = logging.getLogger(__name__)


class ReferenceResolutionWorker(QRunnable):
    """Worker for classifying and resolving one dropped item in background thread."""

    def __init__(self, index: int, reference: ItemReference,
                 classifier: ReferenceClassifier, callback: Callable):
        super().__init__()
        self.index = index
        self.reference = reference
        self.classifier = classifier
        self.callback = callback

    @Slot()
    def run(self):
        """Resolve the reference and report the outcome."""
        resolved = None
        reason = None
        message = ""

        try:
            classification = self.classifier.classify(self.reference)
            resolved = self.classifier.resolve(self.reference, classification)
        except ReferenceResolutionError as e:
            reason, message = e.reason, str(e)
        except Exception as e:
            logger.error(f"Unexpected error resolving {self.reference.description}: {e}")
            reason, message = FailureReason.RESOLUTION_FAILED, str(e)

        self.callback(self.index, resolved, reason, message)


class IconIngestionCoordinator(QObject):
    """Turns a batch of dropped items into an ordered list of icons."""

    # Signals
    ingestion_started = Signal()
    progress_changed = Signal(float)  # completed / total
    results_published = Signal(list)  # List[ExtractionResult]
    ingestion_finished = Signal(object)  # IngestionReport
    processing_changed = Signal(bool)

    # Worker outcome: index, ResolvedFile or None, FailureReason or None, message
    _resolution_finished = Signal(int, object, object, str)

    def __init__(self, config_manager: ConfigurationManager,
                 extractor: Optional[IconExtractor] = None,
                 classifier: Optional[ReferenceClassifier] = None,
                 thread_pool: Optional[QThreadPool] = None):
        super().__init__()
        self.config_manager = config_manager
        self.extractor = extractor or IconExtractor(config_manager)
        self.classifier = classifier or ReferenceClassifier(config_manager)

        self.icon_dimensions = self.config_manager.get('icons.dimensions', 1024)

        # Thread pool for background resolution
        if thread_pool is None:
            thread_pool = QThreadPool()
            max_threads = self.config_manager.get('performance.max_concurrent_resolutions', 4)
            thread_pool.setMaxThreadCount(max_threads)
        self.thread_pool = thread_pool

        # Batch accumulator, guarded by _lock
        self._lock = threading.Lock()
        self._processing = False
        self._total = 0
        self._completed = 0
        self._slots: List[Optional[ExtractionResult]] = []
        self._failures: List[ItemFailure] = []
        self._progress = 0.0

        # Published state, replaced wholesale
        self._published: Tuple[ExtractionResult, ...] = ()
        self._last_report: Optional[IngestionReport] = None

        self._resolution_finished.connect(self._on_resolution_finished, Qt.QueuedConnection)

        logger.info(f"IconIngestionCoordinator initialized (icon size: {self.icon_dimensions})")

    @property
    def is_processing(self) -> bool:
        with self._lock:
            return self._processing

    @property
    def progress(self) -> float:
        with self._lock:
            return self._progress

    @property
    def last_report(self) -> Optional[IngestionReport]:
        with self._lock:
            return self._last_report

    def current_results(self) -> Tuple[ExtractionResult, ...]:
        """Results of the last completed batch."""
        with self._lock:
            return self._published

    def subscribe(self, callback: Callable[[list], None]) -> None:
        """Register a callable invoked with every newly published result list."""
        self.results_published.connect(callback)

    def ingest(self, references: Iterable[ItemReference]) -> bool:
        """
        Start ingesting a batch of dropped items.

        Args:
            references: One reference per dropped item

        Returns:
            True if a batch was started, False for an empty batch or while
            another batch is still running
        """
        references = list(references)
        if not references:
            logger.debug("Ignoring empty drop")
            return False

        with self._lock:
            if self._processing:
                logger.warning(f"Ingestion already in progress, rejecting {len(references)} new items")
                return False
            self._processing = True
            self._total = len(references)
            self._completed = 0
            self._slots = [None] * len(references)
            self._failures = []
            self._progress = 0.0

        logger.info(f"Ingesting {len(references)} dropped items")

        self.processing_changed.emit(True)
        self.ingestion_started.emit()
        self.progress_changed.emit(0.0)

        for index, reference in enumerate(references):
            worker = ReferenceResolutionWorker(index, reference, self.classifier,
                                               self._post_resolution)
            self.thread_pool.start(worker)

        return True

    def clear_results(self) -> None:
        """Replace the published results with an empty set."""
        with self._lock:
            self._published = ()
        logger.info("Cleared icons")
        self.results_published.emit([])

    def shutdown(self) -> None:
        """Shutdown the coordinator."""
        logger.info("IconIngestionCoordinator shutting down")

        timeout = self.config_manager.get('performance.shutdown_timeout_ms', 5000)
        if not self.thread_pool.waitForDone(timeout):
            logger.warning("Some resolution workers did not complete in time")

    def _post_resolution(self, index: int, resolved: Optional[ResolvedFile],
                         reason: Optional[FailureReason], message: str) -> None:
        """Called on worker threads."""
        self._resolution_finished.emit(index, resolved, reason, message or "")

    @Slot(int, object, object, str)
    def _on_resolution_finished(self, index: int, resolved: Optional[ResolvedFile],
                                reason: Optional[FailureReason], message: str) -> None:
        """Extract the icon for a resolved item and account for its completion."""
        result = None

        if resolved is not None:
            try:
                icon = self.extractor.extract(resolved, self.icon_dimensions)
                result = ExtractionResult(resolved.path, icon)
            except IconExtractionError as e:
                reason, message = e.reason, str(e)
            except Exception as e:
                logger.error(f"Unexpected error extracting icon from {resolved.path}: {e}")
                reason, message = FailureReason.EXTRACTION_UNAVAILABLE, str(e)

        if reason is FailureReason.UNSUPPORTED_REFERENCE:
            logger.info(f"Skipping unsupported item {index + 1}: {message}")
        elif result is None:
            logger.warning(f"Skipping item {index + 1} ({reason.value}): {message}")

        with self._lock:
            self._slots[index] = result
            if result is None:
                self._failures.append(ItemFailure(index, reason, message))
            self._completed += 1
            self._progress = self._completed / self._total
            progress = self._progress
            finished = self._completed == self._total

        self.progress_changed.emit(progress)

        if finished:
            self._publish()

    def _publish(self) -> None:
        """Release the batch's results to consumers."""
        with self._lock:
            results = tuple(result for result in self._slots if result is not None)
            report = IngestionReport(
                total=self._total,
                succeeded=len(results),
                failures=tuple(sorted(self._failures, key=lambda failure: failure.index)),
            )
            self._published = results
            self._last_report = report
            self._slots = []
            self._failures = []
            self._processing = False

        logger.info(f"Ingestion finished: {report.succeeded} of {report.total} icons extracted "
                    f"({report.unsupported} unsupported, {report.failed} failed)")

        self.results_published.emit(list(results))
        self.ingestion_finished.emit(report)
        self.processing_changed.emit(False)
