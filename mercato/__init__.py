"""Mercato catalog - seller product lifecycle and bulk catalog operations."""

__version__ = "0.1.0"
