"""Text helpers including simple word-count chunking."""

from __future__ import annotations

import re
from typing import Iterable, List

from docinsight.models import Chunk

DEFAULT_CHUNK_TOKENS = 2000

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def chunk_words(text: str, *, max_tokens: int = DEFAULT_CHUNK_TOKENS) -> List[Chunk]:
    """Split text into consecutive chunks of at most ``max_tokens`` words.

    Words are whitespace-delimited and rejoined with a single space, so a
    chunk boundary never falls inside a word. Text without any words comes
    back unchanged as a single chunk, which means callers always receive at
    least one chunk.
    """
    if max_tokens <= 0:
        raise ValueError(f"max_tokens must be a positive integer, got {max_tokens}")

    words = text.split()
    if not words:
        return [Chunk(index=0, text=text, token_count=0)]

    chunks: List[Chunk] = []
    for index, start in enumerate(range(0, len(words), max_tokens)):
        group = words[start : start + max_tokens]
        chunks.append(Chunk(index=index, text=" ".join(group), token_count=len(group)))
    return chunks


def truncate(text: str, max_chars: int) -> str:
    """Cut text down to at most ``max_chars`` characters."""
    return text[:max_chars]


def preview(text: str, length: int = 200) -> str:
    """Short excerpt used to show where an answer came from."""
    return text[:length] + "..."


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence from model output."""
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    stripped = _FENCE_OPEN.sub("", stripped, count=1)
    stripped = _FENCE_CLOSE.sub("", stripped, count=1)
    return stripped.strip()


def normalize_whitespace(lines: Iterable[str]) -> str:
    """Collapse whitespace and join lines."""
    return "\n".join(line.strip() for line in lines if line.strip())
