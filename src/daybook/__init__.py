"""Daybook: a small local journal with JSON export and import."""

__version__ = "0.1.0"
