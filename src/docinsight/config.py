"""Application configuration defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

from docinsight.llm.client import DEFAULT_MODEL, GenerationConfig
from docinsight.utils.text import DEFAULT_CHUNK_TOKENS

DEFAULT_MAX_CONTEXT_CHARS = 30000


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


@dataclass(slots=True)
class AppConfig:
    model_id: str = DEFAULT_MODEL
    api_key: str | None = None
    max_context_chars: int = DEFAULT_MAX_CONTEXT_CHARS
    chunk_tokens: int = DEFAULT_CHUNK_TOKENS
    temperature: float = 0.3

    def __post_init__(self) -> None:
        if self.max_context_chars <= 0:
            raise ValueError("max_context_chars must be positive")
        if self.chunk_tokens <= 0:
            raise ValueError("chunk_tokens must be positive")

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None, *, dotenv: bool = True) -> "AppConfig":
        """Build a config from GEMINI_* and DOCINSIGHT_* environment variables."""
        if env is None:
            if dotenv:
                load_dotenv()
            env = os.environ
        return cls(
            model_id=env.get("GEMINI_MODEL") or DEFAULT_MODEL,
            api_key=env.get("GEMINI_API_KEY") or None,
            max_context_chars=_int_from_env(
                env, "DOCINSIGHT_MAX_CONTEXT_CHARS", DEFAULT_MAX_CONTEXT_CHARS
            ),
            chunk_tokens=_int_from_env(env, "DOCINSIGHT_CHUNK_TOKENS", DEFAULT_CHUNK_TOKENS),
        )

    def generation_config(self) -> GenerationConfig:
        return GenerationConfig(
            model_id=self.model_id,
            api_key=self.api_key,
            temperature=self.temperature,
        )
