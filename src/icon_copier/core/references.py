"""
Dropped item references and their classification.

A drop delivers opaque item references. Each one advertises a set of type
identifiers and can load its value on demand; loads may block, so they run
on worker threads. ReferenceClassifier decides how a reference is resolved
and turns the loaded payload into a local file.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterable, List, Optional

from PySide6.QtCore import QByteArray, QMimeData, QUrl

from ..config.defaults import APPLICATION_FILE_TYPE, FILE_URL_TYPE, URI_LIST_TYPE
from ..config.manager import ConfigurationManager
from .exceptions import FailureReason, ReferenceResolutionError
from .models import ResolvedFile


logger = logging.getLogger(__name__)


class ItemReference(ABC):
    """One dropped item before its file path is known."""

    @property
    @abstractmethod
    def type_identifiers(self) -> FrozenSet[str]:
        """Type identifiers declared by the drag source."""

    @abstractmethod
    def load_item(self, type_identifier: str) -> Any:
        """
        Load the item's value for a declared type identifier.

        May block. Returns a URL, a path, a string or raw bytes.
        """

    def has_item_conforming_to(self, type_identifier: str) -> bool:
        return type_identifier in self.type_identifiers

    def can_load_url(self) -> bool:
        """Whether the item can hand out a URL object directly."""
        return False

    def load_url(self) -> QUrl:
        raise ReferenceResolutionError(f"{self.description} cannot provide a URL")

    @property
    def description(self) -> str:
        return self.__class__.__name__


class UrlItemReference(ItemReference):
    """A dropped URL, as delivered by QMimeData.urls()."""

    def __init__(self, url: QUrl, application_extensions: Iterable[str] = ("app",)):
        self._url = QUrl(url)
        identifiers = {FILE_URL_TYPE}
        if self._url.isLocalFile():
            suffix = Path(self._url.toLocalFile()).suffix[1:].lower()
            if suffix in {ext.lower() for ext in application_extensions}:
                identifiers.add(APPLICATION_FILE_TYPE)
        self._type_identifiers = frozenset(identifiers)

    @property
    def type_identifiers(self) -> FrozenSet[str]:
        return self._type_identifiers

    def can_load_url(self) -> bool:
        return self._url.isValid()

    def load_url(self) -> QUrl:
        return QUrl(self._url)

    def load_item(self, type_identifier: str) -> Any:
        if type_identifier not in self._type_identifiers:
            raise ReferenceResolutionError(
                f"{self.description} does not provide {type_identifier}")
        return QUrl(self._url)

    @property
    def description(self) -> str:
        return self._url.toString()


class MimeItemReference(ItemReference):
    """
    A drop payload without URLs.

    The payload is copied at construction; QMimeData belongs to the drag and
    must not be touched from worker threads.
    """

    def __init__(self, mime_data: QMimeData):
        self._payloads: Dict[str, bytes] = {
            fmt: mime_data.data(fmt).data() for fmt in mime_data.formats()
        }

    @property
    def type_identifiers(self) -> FrozenSet[str]:
        return frozenset(self._payloads)

    def load_item(self, type_identifier: str) -> Any:
        try:
            return self._payloads[type_identifier]
        except KeyError:
            raise ReferenceResolutionError(
                f"{self.description} does not provide {type_identifier}") from None

    @property
    def description(self) -> str:
        return f"payload({', '.join(sorted(self._payloads))})"


def references_from_mime_data(mime_data: QMimeData,
                              application_extensions: Iterable[str] = ("app",)) -> List[ItemReference]:
    """Build one reference per dropped item."""
    if mime_data.hasUrls():
        extensions = tuple(application_extensions)
        return [UrlItemReference(url, extensions) for url in mime_data.urls()]
    if mime_data.formats():
        return [MimeItemReference(mime_data)]
    return []


class Strategy(Enum):
    """How a reference gets resolved."""
    DIRECT_URL = "direct_url"
    EMBEDDED_BYTES = "embedded_bytes"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Classification:
    """
    Resolution plan for one reference.

    type_identifier is None when the reference yields its URL object
    directly rather than through a type identifier's loader.
    """
    strategy: Strategy
    type_identifier: Optional[str] = None

    @property
    def supported(self) -> bool:
        return self.strategy is not Strategy.UNSUPPORTED


class ReferenceClassifier:
    """Chooses a resolution strategy and resolves references to files."""

    def __init__(self, config_manager: ConfigurationManager):
        self.config_manager = config_manager
        identifiers = self.config_manager.get('ingestion.type_identifiers', {})
        self.application_types = list(identifiers.get('application', [APPLICATION_FILE_TYPE]))
        self.file_url_types = list(identifiers.get('file_url', [FILE_URL_TYPE]))
        self.url_data_types = list(identifiers.get('url_data', [URI_LIST_TYPE]))

    def classify(self, reference: ItemReference) -> Classification:
        """
        Pick the resolution strategy for a reference without loading it.

        Application bundles are checked first: drag sources often declare a
        generic file URL alongside the bundle type.
        """
        for type_identifier in self.application_types:
            if reference.has_item_conforming_to(type_identifier):
                return Classification(Strategy.DIRECT_URL, type_identifier)

        if reference.can_load_url():
            return Classification(Strategy.DIRECT_URL)

        for type_identifier in self.file_url_types:
            if reference.has_item_conforming_to(type_identifier):
                return Classification(Strategy.DIRECT_URL, type_identifier)

        for type_identifier in self.url_data_types:
            if reference.has_item_conforming_to(type_identifier):
                return Classification(Strategy.EMBEDDED_BYTES, type_identifier)

        return Classification(Strategy.UNSUPPORTED)

    def resolve(self, reference: ItemReference, classification: Classification) -> ResolvedFile:
        """
        Load a reference and turn its payload into an existing local file.

        Raises:
            ReferenceResolutionError: If the reference is unsupported, the
                load fails, or the payload does not name an existing file
        """
        if not classification.supported:
            raise ReferenceResolutionError(
                f"Unsupported item: {reference.description}",
                reason=FailureReason.UNSUPPORTED_REFERENCE)

        try:
            if classification.type_identifier is None:
                payload = reference.load_url()
            else:
                payload = reference.load_item(classification.type_identifier)
        except ReferenceResolutionError:
            raise
        except Exception as e:
            raise ReferenceResolutionError(
                f"Loading {reference.description} failed: {e}") from e

        url = self._payload_to_url(payload)
        if not url.isLocalFile():
            raise ReferenceResolutionError(f"Not a local file: {url.toString()}")

        path = Path(url.toLocalFile()).absolute()
        if not path.exists():
            raise ReferenceResolutionError(f"File does not exist: {path}")

        logger.debug(f"Resolved {reference.description} ({classification.strategy.value}) to {path}")
        return ResolvedFile(path)

    def _payload_to_url(self, payload: Any) -> QUrl:
        """Convert a loaded payload into a URL."""
        if isinstance(payload, QUrl):
            return payload
        if isinstance(payload, Path):
            return QUrl.fromLocalFile(str(payload))
        if isinstance(payload, QByteArray):
            payload = payload.data()
        if isinstance(payload, (bytes, bytearray)):
            try:
                payload = bytes(payload).decode('utf-8')
            except UnicodeDecodeError as e:
                raise ReferenceResolutionError(f"URL data is not valid UTF-8: {e}") from e
            payload = self._first_uri(payload)
        if isinstance(payload, str):
            text = payload.strip()
            if not text:
                raise ReferenceResolutionError("Empty URL payload")
            url = QUrl(text)
            if not url.scheme() or len(url.scheme()) == 1:
                # Plain paths, including Windows drive letters
                url = QUrl.fromLocalFile(text)
            return url

        raise ReferenceResolutionError(
            f"Payload of type {type(payload).__name__} is not convertible to a URL")

    @staticmethod
    def _first_uri(text: str) -> str:
        """Return the first entry of text/uri-list data."""
        for line in text.splitlines():
            line = line.strip()
            if line and not line.startswith('#'):
                return line
        return ""
