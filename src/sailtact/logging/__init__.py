"""Logging utilities for SailTact."""

from sailtact.logging.config import JsonFormatter, setup_logging

__all__ = ["JsonFormatter", "setup_logging"]
