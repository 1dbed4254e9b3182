"""TOEIC study progress backend: leveling engine and dashboard API."""

__version__ = "0.1.0"
