"""Tests for the endpoint dispatch table and request pipeline."""

import asyncio

import pytest

from gateway.errors import SizeError, UpstreamError, ValidationError
from gateway.core.pipeline import (
    AUDIO_TRANSCRIPTION_PREFIX,
    DOCUMENT_SUMMARY_PREFIX,
    ENDPOINTS,
    PROMPT_REQUIRED_MESSAGE,
    run_pipeline,
    validate_request,
)
from gateway.multimodal.assembler import UploadedFile


def _upload(data=b"data", mime_type="application/pdf"):
    return UploadedFile(data=data, filename="doc.pdf", mime_type=mime_type)


def _endpoint(path):
    return next(spec for spec in ENDPOINTS if spec.path == path)


def _run(spec_path, config, client, **kwargs):
    return asyncio.run(run_pipeline(_endpoint(spec_path), config, client, **kwargs))


class TestDispatchTable:

    def test_all_routes_registered(self):
        assert [spec.path for spec in ENDPOINTS] == [
            "/generate-text",
            "/gemini/generate",
            "/generate-from-image",
            "/generate-from-document",
            "/generate-from-audio",
        ]

    def test_success_keys(self):
        keys = {spec.path: spec.success_key for spec in ENDPOINTS}
        assert keys["/gemini/generate"] == "response"
        assert all(key == "result" for path, key in keys.items() if path != "/gemini/generate")

    def test_paths_are_unique(self):
        paths = [spec.path for spec in ENDPOINTS]
        assert len(paths) == len(set(paths))


class TestValidation:

    def test_image_checks_file_before_prompt(self):
        with pytest.raises(ValidationError, match='"image"'):
            validate_request(_endpoint("/generate-from-image"), None, None)

    def test_image_requires_prompt_when_file_present(self):
        with pytest.raises(ValidationError) as excinfo:
            validate_request(_endpoint("/generate-from-image"), "", _upload())
        assert excinfo.value.message == PROMPT_REQUIRED_MESSAGE

    def test_multimodal_checks_prompt_and_allows_missing_file(self):
        spec = _endpoint("/gemini/generate")
        with pytest.raises(ValidationError, match="prompt"):
            validate_request(spec, None, None)
        validate_request(spec, "hello", None)

    @pytest.mark.parametrize("path", ["/generate-from-document", "/generate-from-audio"])
    def test_prompt_optional_for_document_and_audio(self, path):
        validate_request(_endpoint(path), None, _upload())


class TestRunPipeline:

    def test_text_endpoint_sends_bare_prompt(self, config, fake_client):
        result = _run("/generate-text", config, fake_client, prompt="Hello")

        assert result == {"result": "generated"}
        assert fake_client.calls == [("gemini-test", "Hello")]

    def test_multimodal_without_file_sends_single_text_part(self, config, fake_client):
        result = _run("/gemini/generate", config, fake_client, prompt="Hello")

        assert result == {"response": "generated"}
        assert fake_client.calls[0][1] == [{"text": "Hello"}]

    def test_document_prefix_and_ordering(self, config, fake_client):
        _run("/generate-from-document", config, fake_client, prompt="what is this", file=_upload(b"abc"))

        contents = fake_client.calls[0][1]
        assert contents == [
            {"inlineData": {"mimeType": "application/pdf", "data": "YWJj"}},
            {"text": DOCUMENT_SUMMARY_PREFIX + "what is this"},
        ]

    def test_audio_prefix_without_prompt(self, config, fake_client):
        _run("/generate-from-audio", config, fake_client, file=_upload(mime_type="audio/mpeg"))

        assert fake_client.calls[0][1][-1] == {"text": AUDIO_TRANSCRIPTION_PREFIX}

    def test_oversized_file_never_reaches_client(self, config, fake_client):
        big = UploadedFile(data=b"\0" * (config.max_inline_bytes + 1), filename="big.mp3", mime_type="audio/mpeg")

        with pytest.raises(SizeError) as excinfo:
            _run("/generate-from-audio", config, fake_client, file=big)

        assert "File API" in excinfo.value.message
        assert fake_client.calls == []

    def test_validation_error_never_reaches_client(self, config, fake_client):
        with pytest.raises(ValidationError):
            _run("/generate-text", config, fake_client, prompt="")
        assert fake_client.calls == []

    def test_upstream_error_propagates(self, config, fake_client_class):
        client = fake_client_class(error=UpstreamError("GEMINI HTTP ERROR (500)"))

        with pytest.raises(UpstreamError):
            _run("/generate-text", config, client, prompt="Hello")

    def test_unmatched_result_returns_diagnostic(self, config, fake_client_class):
        client = fake_client_class(result={"promptFeedback": {"blockReason": "SAFETY"}})

        result = _run("/generate-text", config, client, prompt="Hello")

        assert result["result"].startswith("Error: Could not extract text.")
        assert "SAFETY" in result["result"]
