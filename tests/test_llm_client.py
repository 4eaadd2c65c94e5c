"""Tests for the Gemini generation client."""

from __future__ import annotations

from unittest.mock import MagicMock, PropertyMock, patch

import pytest
from google.api_core import exceptions as google_exceptions

from docinsight.llm.client import (
    ErrorKind,
    GeminiClient,
    GenerationClient,
    GenerationConfig,
    GenerationError,
    classify_error,
)


class TestGenerationConfig:
    """Test GenerationConfig."""

    @pytest.mark.parametrize("key", [None, "", "   ", "your_gemini_api_key_here"])
    def test_missing_or_placeholder_key(self, key: str | None) -> None:
        assert GenerationConfig(api_key=key).has_api_key is False

    def test_real_key(self) -> None:
        assert GenerationConfig(api_key="abc123").has_api_key is True


class TestClassifyError:
    """Test mapping of SDK failures to GenerationError kinds."""

    def test_not_found(self) -> None:
        error = classify_error(google_exceptions.NotFound("models/nope is not found"), "nope")

        assert error.kind is ErrorKind.MODEL_NOT_FOUND
        assert "nope" in str(error)
        assert error.is_configuration_error

    def test_invalid_api_key(self) -> None:
        error = classify_error(google_exceptions.InvalidArgument("API key not valid"), "m")

        assert error.kind is ErrorKind.AUTHENTICATION
        assert error.is_configuration_error

    def test_permission_denied(self) -> None:
        error = classify_error(google_exceptions.PermissionDenied("denied"), "m")

        assert error.kind is ErrorKind.AUTHENTICATION

    def test_quota(self) -> None:
        error = classify_error(google_exceptions.ResourceExhausted("exhausted"), "m")

        assert error.kind is ErrorKind.QUOTA
        assert not error.is_configuration_error

    def test_quota_message_mentioning_api_key(self) -> None:
        """The exception type wins over words in the message."""
        error = classify_error(google_exceptions.ResourceExhausted("Quota exceeded for API key"), "m")

        assert error.kind is ErrorKind.QUOTA
        assert not error.is_configuration_error

    def test_rate_limit_message_mentioning_not_found(self) -> None:
        error = classify_error(
            google_exceptions.TooManyRequests("rate limit: resource not found in cache"), "m"
        )

        assert error.kind is ErrorKind.QUOTA

    def test_invalid_argument_without_key_is_unknown(self) -> None:
        error = classify_error(google_exceptions.InvalidArgument("request payload 404 not found"), "m")

        assert error.kind is ErrorKind.UNKNOWN

    def test_untyped_quota_message(self) -> None:
        error = classify_error(RuntimeError("429 quota exceeded"), "m")

        assert error.kind is ErrorKind.QUOTA

    def test_unknown(self) -> None:
        error = classify_error(RuntimeError("boom"), "m")

        assert error.kind is ErrorKind.UNKNOWN
        assert str(error) == "Generation failed: boom"


class TestGeminiClient:
    """Test GeminiClient.generate."""

    def test_satisfies_protocol(self) -> None:
        assert isinstance(GeminiClient(), GenerationClient)

    @patch("docinsight.llm.client.genai")
    def test_missing_key_raises_configuration_error(self, mock_genai: MagicMock) -> None:
        client = GeminiClient(GenerationConfig(api_key=None))

        with pytest.raises(GenerationError) as excinfo:
            client.generate("prompt")

        assert excinfo.value.kind is ErrorKind.CONFIGURATION
        mock_genai.GenerativeModel.assert_not_called()

    @patch("docinsight.llm.client.genai")
    def test_generate_returns_text(self, mock_genai: MagicMock) -> None:
        mock_model = MagicMock()
        mock_model.generate_content.return_value.text = "generated"
        mock_genai.GenerativeModel.return_value = mock_model

        client = GeminiClient(GenerationConfig(api_key="key", model_id="gemini-1.5-flash"))
        result = client.generate("hello")

        assert result == "generated"
        mock_genai.configure.assert_called_once_with(api_key="key")
        assert mock_genai.GenerativeModel.call_args[0][0] == "gemini-1.5-flash"
        mock_model.generate_content.assert_called_once_with("hello")

    @patch("docinsight.llm.client.genai")
    def test_model_id_override(self, mock_genai: MagicMock) -> None:
        mock_genai.GenerativeModel.return_value.generate_content.return_value.text = "ok"

        GeminiClient(GenerationConfig(api_key="key")).generate("hello", "gemini-1.5-pro")

        assert mock_genai.GenerativeModel.call_args[0][0] == "gemini-1.5-pro"

    @patch("docinsight.llm.client.genai")
    def test_empty_response_text(self, mock_genai: MagicMock) -> None:
        mock_genai.GenerativeModel.return_value.generate_content.return_value.text = None

        assert GeminiClient(GenerationConfig(api_key="key")).generate("hello") == ""

    @patch("docinsight.llm.client.genai")
    def test_blocked_response_raises_unknown(self, mock_genai: MagicMock) -> None:
        """The SDK raises ValueError from .text when the candidate was blocked."""
        response = MagicMock()
        type(response).text = PropertyMock(side_effect=ValueError("response was blocked by safety filters"))
        mock_genai.GenerativeModel.return_value.generate_content.return_value = response

        with pytest.raises(GenerationError) as excinfo:
            GeminiClient(GenerationConfig(api_key="key")).generate("hello")

        assert excinfo.value.kind is ErrorKind.UNKNOWN
        assert isinstance(excinfo.value.__cause__, ValueError)

    @patch("docinsight.llm.client.genai")
    def test_sdk_error_is_wrapped(self, mock_genai: MagicMock) -> None:
        original = google_exceptions.ResourceExhausted("quota exceeded")
        mock_genai.GenerativeModel.return_value.generate_content.side_effect = original

        with pytest.raises(GenerationError) as excinfo:
            GeminiClient(GenerationConfig(api_key="key")).generate("hello")

        assert excinfo.value.kind is ErrorKind.QUOTA
        assert excinfo.value.__cause__ is original

    @patch("docinsight.llm.client.genai")
    def test_no_retry_on_failure(self, mock_genai: MagicMock) -> None:
        mock_model = mock_genai.GenerativeModel.return_value
        mock_model.generate_content.side_effect = RuntimeError("network down")

        with pytest.raises(GenerationError):
            GeminiClient(GenerationConfig(api_key="key")).generate("hello")

        assert mock_model.generate_content.call_count == 1
