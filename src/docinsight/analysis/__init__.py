"""Document analysis tasks built on top of a generation client."""
