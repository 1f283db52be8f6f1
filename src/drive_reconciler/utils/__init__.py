"""Logging helpers."""

from .logging import setup_logging

__all__ = ["setup_logging"]
