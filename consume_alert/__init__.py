"""Parse card payment notifications, classify spending and report summaries."""

__version__ = "0.1.0"