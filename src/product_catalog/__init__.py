"""Product catalog service with a write-through product cache."""

__version__ = "0.1.0"
