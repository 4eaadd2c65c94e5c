"""Small helpers shared across DocInsight."""
