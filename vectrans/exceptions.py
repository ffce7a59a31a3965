"""
exceptions.py - Error Types for vectrans

Two failure categories exist:
- InvalidInputError: the supplied data cannot be processed (e.g. `vech` on a
  matrix that is not symmetric).
- InvalidArgumentError: a dimension, dtype or format argument is invalid.

Both derive from ValueError, so existing ``except ValueError`` handlers
keep catching them.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class VectransError(Exception):
    """
    Base class for all vectrans errors.

    Parameters
    ----------
    message : str
        The primary error message.
    context : dict, optional
        Values that describe the offending input (shapes, dimensions).
        Appended to the message when present.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.context = context or {}

        full_message = message
        if self.context:
            details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            full_message = f"{message} ({details})"

        super().__init__(full_message)


class InvalidInputError(VectransError, ValueError):
    """Raised when input data is unusable, e.g. a non-symmetric matrix."""


class InvalidArgumentError(VectransError, ValueError):
    """Raised for negative dimensions, unsupported dtypes or formats."""
