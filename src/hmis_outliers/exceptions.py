"""
Custom exceptions for hmis-outliers.

Both concrete errors are raised before any computation starts, so a call
either returns a complete result or nothing at all.
"""

from typing import Any, Dict, Iterable, Optional


class OutlierCheckError(Exception):
    """Base exception for all hmis-outliers errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'code': self.error_code,
            'message': self.message,
            'details': self.details,
        }


class SchemaError(OutlierCheckError):
    """Raised when the input table lacks required columns or has invalid types."""

    def __init__(self, message: str, missing_columns: Optional[Iterable[str]] = None,
                 details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if missing_columns is not None:
            details['missing_columns'] = list(missing_columns)
        super().__init__(
            message=message,
            error_code="SCHEMA_ERROR",
            details=details,
        )


class UsageError(OutlierCheckError):
    """Raised when an argument is not one of its allowed values."""

    def __init__(self, parameter: str, value: Any, allowed: Optional[Iterable[Any]] = None,
                 message: Optional[str] = None):
        allowed = list(allowed) if allowed is not None else []
        if message is None:
            message = f"`{parameter}` must be one of {allowed}, not {value!r}"
        details = {"parameter": parameter, "value": value}
        if allowed:
            details["allowed"] = allowed
        super().__init__(
            message=message,
            error_code="INVALID_PARAMETER",
            details=details,
        )
