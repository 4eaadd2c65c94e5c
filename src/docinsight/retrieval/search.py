"""Keyword-overlap chunk selection for question answering.

Retrieval is deliberately lexical: a question is reduced to its longer words
and every chunk is scored by how many of those words it contains. There are
no embeddings and nothing is cached between calls.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

from docinsight.models import Chunk
from docinsight.utils.text import DEFAULT_CHUNK_TOKENS, chunk_words

LOGGER = logging.getLogger(__name__)

MIN_TERM_LENGTH = 4


def query_terms(query: str) -> List[str]:
    """Return the distinct lower-cased query words long enough to score."""
    terms = (word.lower() for word in query.split())
    return list(dict.fromkeys(term for term in terms if len(term) >= MIN_TERM_LENGTH))


def score_chunk(chunk: Chunk, terms: Sequence[str]) -> int:
    """Count how many terms occur anywhere in the chunk text."""
    haystack = chunk.text.lower()
    return sum(1 for term in terms if term in haystack)


def select_best_chunk(chunks: Sequence[Chunk], query: str) -> Chunk:
    """Pick the chunk sharing the most query terms.

    The earliest chunk wins ties, and the first chunk is returned when no
    chunk matches at all.
    """
    if not chunks:
        raise ValueError("select_best_chunk requires at least one chunk")

    terms = query_terms(query)
    best = chunks[0]
    max_matches = 0
    for chunk in chunks:
        matches = score_chunk(chunk, terms)
        if matches > max_matches:
            max_matches = matches
            best = chunk
    return best


class ContextRetriever:
    """Chunk a document and return the part most relevant to a question."""

    def __init__(self, *, max_tokens: int = DEFAULT_CHUNK_TOKENS) -> None:
        if max_tokens <= 0:
            raise ValueError(f"max_tokens must be a positive integer, got {max_tokens}")
        self.max_tokens = max_tokens

    def retrieve(self, text: str, query: str) -> Chunk:
        chunks = chunk_words(text, max_tokens=self.max_tokens)
        best = select_best_chunk(chunks, query)
        LOGGER.debug("Selected chunk %s of %s for query", best.index + 1, len(chunks))
        return best
