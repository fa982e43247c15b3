"""Generic helpers for lists, sets, typed values, thread-safe containers and database column values."""

__version__ = "0.1.0"