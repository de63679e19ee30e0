"""Custom exception hierarchy for the admin dashboard."""

from errors.exceptions import (
    ActionInProgressError,
    AdminError,
    CsvFormatError,
    NetworkError,
    ValidationError,
)

__all__ = [
    "ActionInProgressError",
    "AdminError",
    "CsvFormatError",
    "NetworkError",
    "ValidationError",
]
