"""Mini README: Core package initializer for the Finance Tracker service.

This module exposes convenience imports so callers can reach the logging
helpers and the transaction store without knowing the exact module layout.
It stays lightweight: importing the package does not build the web
application or read configuration.
"""

from .logging_utils import get_logger
from .transactions import TransactionStore

__all__ = ["TransactionStore", "get_logger"]
