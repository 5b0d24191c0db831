"""
Tests for dropped item classification and resolution.
"""

from pathlib import Path

import pytest
from PySide6.QtCore import QByteArray, QMimeData, QUrl

from icon_copier.config.defaults import APPLICATION_FILE_TYPE, FILE_URL_TYPE, URI_LIST_TYPE
from icon_copier.core.exceptions import FailureReason, ReferenceResolutionError
from icon_copier.core.references import (
    Classification, MimeItemReference, ReferenceClassifier, Strategy,
    UrlItemReference, references_from_mime_data,
)

from conftest import FakeItemReference


@pytest.fixture
def classifier(config_manager):
    return ReferenceClassifier(config_manager)


class TestClassify:
    """Strategy selection."""

    def test_application_type_wins(self, classifier, tmp_path):
        url = QUrl.fromLocalFile(str(tmp_path / "Notes.app"))
        reference = FakeItemReference(
            {FILE_URL_TYPE: url, URI_LIST_TYPE: b"", APPLICATION_FILE_TYPE: url},
            url=url.toString(),
        )

        classification = classifier.classify(reference)

        assert classification == Classification(Strategy.DIRECT_URL, APPLICATION_FILE_TYPE)

    def test_url_object_before_file_url(self, classifier, tmp_path):
        url = QUrl.fromLocalFile(str(tmp_path / "photo.png"))
        reference = FakeItemReference({FILE_URL_TYPE: url}, url=url.toString())

        classification = classifier.classify(reference)

        assert classification.strategy is Strategy.DIRECT_URL
        assert classification.type_identifier is None

    def test_file_url(self, classifier, tmp_path):
        reference = FakeItemReference({FILE_URL_TYPE: str(tmp_path / "a.txt")})

        assert classifier.classify(reference) == Classification(Strategy.DIRECT_URL, FILE_URL_TYPE)

    def test_uri_list_is_embedded_bytes(self, classifier):
        reference = FakeItemReference({URI_LIST_TYPE: b"file:///tmp/a.txt"})

        assert classifier.classify(reference) == Classification(
            Strategy.EMBEDDED_BYTES, URI_LIST_TYPE)

    def test_unrecognized_types_are_unsupported(self, classifier):
        reference = FakeItemReference({"public.utf8-plain-text": b"hello"})

        classification = classifier.classify(reference)

        assert classification.strategy is Strategy.UNSUPPORTED
        assert not classification.supported

    def test_classify_does_not_load(self, classifier):
        reference = FakeItemReference({FILE_URL_TYPE: "x"}, error=RuntimeError("loaded"))

        assert classifier.classify(reference).supported


class TestResolve:
    """Payload loading and normalization."""

    @pytest.mark.parametrize("make_payload", [
        lambda path: QUrl.fromLocalFile(str(path)),
        lambda path: path,
        lambda path: str(path),
        lambda path: QUrl.fromLocalFile(str(path)).toString(),
        lambda path: b"# dropped\r\n" + QUrl.fromLocalFile(str(path)).toEncoded().data() + b"\r\n",
        lambda path: QByteArray(QUrl.fromLocalFile(str(path)).toEncoded()),
    ], ids=["qurl", "path", "plain-string", "url-string", "uri-list", "qbytearray"])
    def test_payload_shapes_resolve_to_same_file(self, classifier, make_png, make_payload):
        path = make_png("photo.png")
        reference = FakeItemReference({URI_LIST_TYPE: make_payload(path)})

        resolved = classifier.resolve(reference, classifier.classify(reference))

        assert resolved.path == path.absolute()
        assert resolved.extension == "png"
        assert resolved.display_name == "photo"

    def test_url_object_strategy_uses_load_url(self, classifier, make_bundle):
        bundle = make_bundle("Calculator.app")
        reference = FakeItemReference(url=QUrl.fromLocalFile(str(bundle)).toString())

        resolved = classifier.resolve(reference, classifier.classify(reference))

        assert resolved.path == bundle.absolute()

    def test_unsupported_reference(self, classifier):
        reference = FakeItemReference({"public.utf8-plain-text": b"hello"})

        with pytest.raises(ReferenceResolutionError) as exc_info:
            classifier.resolve(reference, classifier.classify(reference))

        assert exc_info.value.reason is FailureReason.UNSUPPORTED_REFERENCE

    def test_remote_url_fails(self, classifier):
        reference = FakeItemReference({FILE_URL_TYPE: QUrl("https://example.com/icon.png")})

        with pytest.raises(ReferenceResolutionError, match="Not a local file") as exc_info:
            classifier.resolve(reference, classifier.classify(reference))

        assert exc_info.value.reason is FailureReason.RESOLUTION_FAILED

    def test_missing_file_fails(self, classifier, tmp_path):
        reference = FakeItemReference({FILE_URL_TYPE: tmp_path / "gone.app"})

        with pytest.raises(ReferenceResolutionError, match="does not exist"):
            classifier.resolve(reference, classifier.classify(reference))

    def test_loader_error_is_wrapped(self, classifier):
        reference = FakeItemReference({FILE_URL_TYPE: "x"}, error=RuntimeError("boom"))

        with pytest.raises(ReferenceResolutionError, match="boom") as exc_info:
            classifier.resolve(reference, classifier.classify(reference))

        assert exc_info.value.reason is FailureReason.RESOLUTION_FAILED

    @pytest.mark.parametrize("payload", [b"", b"\xff\xfe", 42])
    def test_unusable_payload(self, classifier, payload):
        reference = FakeItemReference({URI_LIST_TYPE: payload})

        with pytest.raises(ReferenceResolutionError):
            classifier.resolve(reference, classifier.classify(reference))


class TestMimeReferences:
    """References built from drop payloads."""

    def test_one_reference_per_url(self, tmp_path):
        mime_data = QMimeData()
        mime_data.setUrls([
            QUrl.fromLocalFile(str(tmp_path / "Notes.app")),
            QUrl.fromLocalFile(str(tmp_path / "photo.png")),
        ])

        references = references_from_mime_data(mime_data, ["app"])

        assert len(references) == 2
        assert all(isinstance(reference, UrlItemReference) for reference in references)
        assert references[0].has_item_conforming_to(APPLICATION_FILE_TYPE)
        assert not references[1].has_item_conforming_to(APPLICATION_FILE_TYPE)
        assert references[1].has_item_conforming_to(FILE_URL_TYPE)

    def test_application_extension_is_case_insensitive(self, tmp_path):
        reference = UrlItemReference(QUrl.fromLocalFile(str(tmp_path / "Xcode.APP")))

        assert reference.has_item_conforming_to(APPLICATION_FILE_TYPE)

    def test_payload_without_urls(self):
        mime_data = QMimeData()
        mime_data.setText("just text")

        references = references_from_mime_data(mime_data)

        assert len(references) == 1
        assert isinstance(references[0], MimeItemReference)
        assert references[0].has_item_conforming_to("text/plain")

    def test_empty_payload(self):
        assert references_from_mime_data(QMimeData()) == []

    def test_mime_uri_list_resolves(self, classifier, make_png):
        path = make_png("shot.png")
        mime_data = QMimeData()
        mime_data.setData(URI_LIST_TYPE, QUrl.fromLocalFile(str(path)).toEncoded())
        reference = MimeItemReference(mime_data)

        classification = classifier.classify(reference)
        resolved = classifier.resolve(reference, classification)

        assert classification.strategy is Strategy.EMBEDDED_BYTES
        assert resolved.path == Path(path).absolute()
