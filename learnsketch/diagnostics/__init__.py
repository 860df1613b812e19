"""Logging helpers shared by the sketch runtime."""

from .logging_setup import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
