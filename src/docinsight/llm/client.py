"""Generation client wrapping the hosted Gemini models."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

DEFAULT_MODEL = "gemini-1.5-flash"
PLACEHOLDER_API_KEYS = frozenset({"", "your_gemini_api_key_here"})

logger = logging.getLogger(__name__)


class ErrorKind(str, enum.Enum):
    CONFIGURATION = "configuration"
    AUTHENTICATION = "authentication"
    MODEL_NOT_FOUND = "model_not_found"
    QUOTA = "quota"
    UNKNOWN = "unknown"


class GenerationError(RuntimeError):
    """Raised when the hosted model cannot produce a response."""

    def __init__(self, message: str, *, kind: ErrorKind = ErrorKind.UNKNOWN) -> None:
        super().__init__(message)
        self.kind = kind

    @property
    def is_configuration_error(self) -> bool:
        """True when retrying will not help until settings are fixed."""
        return self.kind in (
            ErrorKind.CONFIGURATION,
            ErrorKind.AUTHENTICATION,
            ErrorKind.MODEL_NOT_FOUND,
        )


@runtime_checkable
class GenerationClient(Protocol):
    """Anything that turns a prompt into generated text."""

    def generate(self, prompt: str, model_id: str | None = None) -> str:
        ...


@dataclass(slots=True)
class GenerationConfig:
    model_id: str = DEFAULT_MODEL
    api_key: str | None = None
    temperature: float = 0.3
    max_output_tokens: int | None = None

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None and self.api_key.strip() not in PLACEHOLDER_API_KEYS


def _not_found(model_id: str) -> GenerationError:
    return GenerationError(
        f"Model '{model_id}' not found. Check GEMINI_MODEL; "
        "try gemini-1.5-flash or gemini-1.5-pro.",
        kind=ErrorKind.MODEL_NOT_FOUND,
    )


def classify_error(exc: Exception, model_id: str) -> GenerationError:
    """Translate an SDK failure into a :class:`GenerationError`.

    Typed API errors are classified by their type alone. Message text is only
    inspected for errors that do not carry a Google API status.
    """
    message = str(exc)

    if isinstance(exc, google_exceptions.NotFound):
        return _not_found(model_id)
    if isinstance(exc, (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied)):
        return GenerationError(
            f"Gemini API key is invalid or not permitted: {message}",
            kind=ErrorKind.AUTHENTICATION,
        )
    if isinstance(exc, (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests)):
        return GenerationError(f"Gemini quota exceeded: {message}", kind=ErrorKind.QUOTA)
    if isinstance(exc, google_exceptions.InvalidArgument) and "api key" in message.lower():
        return GenerationError(
            f"Gemini API key is invalid or not permitted: {message}",
            kind=ErrorKind.AUTHENTICATION,
        )
    if isinstance(exc, google_exceptions.GoogleAPIError):
        return GenerationError(f"Generation failed: {message or type(exc).__name__}")

    lowered = message.lower()
    if "quota" in lowered or "rate limit" in lowered:
        return GenerationError(f"Gemini quota exceeded: {message}", kind=ErrorKind.QUOTA)
    if "api key" in lowered or "api_key" in lowered:
        return GenerationError(
            f"Gemini API key is invalid or not permitted: {message}",
            kind=ErrorKind.AUTHENTICATION,
        )
    if "not found" in lowered or "404" in lowered:
        return _not_found(model_id)
    return GenerationError(f"Generation failed: {message or type(exc).__name__}")


class GeminiClient:
    """Thin wrapper around ``google.generativeai`` text generation.

    Credentials are checked when a prompt is sent, not at construction, so a
    web server can start without a key and report the problem per request.
    Failed calls are not retried.
    """

    def __init__(self, config: GenerationConfig | None = None) -> None:
        self.config = config or GenerationConfig()

    def _build_model(self, model_id: str) -> genai.GenerativeModel:
        genai.configure(api_key=self.config.api_key)
        generation_config = genai.GenerationConfig(
            temperature=self.config.temperature,
            max_output_tokens=self.config.max_output_tokens,
        )
        return genai.GenerativeModel(model_id, generation_config=generation_config)

    def generate(self, prompt: str, model_id: str | None = None) -> str:
        """Send a prompt and return the generated text."""
        if not self.config.has_api_key:
            raise GenerationError(
                "Gemini API key is not configured. Set GEMINI_API_KEY in your environment or .env file.",
                kind=ErrorKind.CONFIGURATION,
            )

        model_name = model_id or self.config.model_id
        logger.debug(f"Sending prompt of {len(prompt)} characters to {model_name}")
        try:
            response = self._build_model(model_name).generate_content(prompt)
            return response.text or ""
        except Exception as exc:
            error = classify_error(exc, model_name)
            logger.error(f"Gemini API error ({error.kind.value}): {exc}")
            raise error from exc
