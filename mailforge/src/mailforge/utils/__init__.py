"""Shared helpers for logging and identifiers.

Interfaces:
  ``JsonLogger``, ``get_logger``, ``new_message_id``, ``checksum``.
"""

from .ids import checksum, new_message_id
from .logging import JsonLogger, get_logger

__all__ = [
    "JsonLogger",
    "get_logger",
    "new_message_id",
    "checksum",
]
