"""Mood-aware content recommendation engine."""

__version__ = "0.1.0"
