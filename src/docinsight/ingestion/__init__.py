"""Upload handling and text extraction."""
