"""
Loader errors.

Loaders turn document text into an OutlineDocument and report failures
as LoaderError.
"""

from __future__ import annotations

from typing import Any


class LoaderError(Exception):
    """Base exception for loader errors."""

    def __init__(self, message: str, details: str | None = None):
        self.details = details
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": str(self),
            "details": self.details,
        }
