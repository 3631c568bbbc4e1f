"""docspace: a wiki-style space and article server backed by a JSON document."""

__version__ = "0.1.0"
