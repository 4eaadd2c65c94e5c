"""DocInsight - AI summaries, Q&A, insights and compliance checks for documents."""

__version__ = "0.1.0"
