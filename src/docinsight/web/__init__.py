"""Web interface for DocInsight."""
