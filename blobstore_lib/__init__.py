"""Ordered blob storage on top of unordered embedded key/value engines."""

__version__ = "0.1.0"
