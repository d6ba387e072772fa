"""Logging integration: namespaced loggers plus optional text/JSON handlers."""

from .logging import JsonFormatter, TextFormatter, configure_logging, get_logger

__all__ = ["JsonFormatter", "TextFormatter", "configure_logging", "get_logger"]
