"""Core module for Sisyphus.

Exports the exception hierarchy.
"""

from sisyphus.core.exceptions import (
    SisyphusError,
    RetriesExhaustedError,
)

__all__ = [
    "SisyphusError",
    "RetriesExhaustedError",
]
