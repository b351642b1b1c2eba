"""docso - documentation lookup with paginated listings."""

__version__ = "0.1.0"
