"""Commit-history parsing and changelog category classification."""

__version__ = "0.1.0"
