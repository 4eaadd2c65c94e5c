"""Keyword-based context retrieval."""

from docinsight.retrieval.search import ContextRetriever, query_terms, score_chunk, select_best_chunk

__all__ = ["ContextRetriever", "query_terms", "score_chunk", "select_best_chunk"]
