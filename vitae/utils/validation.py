"""Request payload validation shared by the HTTP handlers and the client."""

from typing import Any, Dict


class InputValidationError(ValueError):
    """
    Raised when a request is missing required input.

    Always raised before any upstream or persistence call is made.

    Attributes:
        message: Error description surfaced to the caller
        fields: Names of the offending payload fields
    """

    def __init__(self, message: str, fields: tuple = ()):
        self.message = message
        self.fields = tuple(fields)
        super().__init__(message)


def is_blank(value: Any) -> bool:
    """True for None, non-strings, and strings that are empty after trimming."""
    return not isinstance(value, str) or not value.strip()


def require_text(payload: Dict[str, Any], *keys: str, message: str = None) -> None:
    """
    Require that every key holds a non-empty string after trimming.

    Args:
        payload: Decoded JSON request body
        keys: Required field names
        message: Error message to raise with (default lists the missing fields)

    Raises:
        InputValidationError: If any field is missing or blank
    """
    missing = [key for key in keys if is_blank(payload.get(key))]
    if missing:
        raise InputValidationError(message or f"Missing required field(s): {', '.join(missing)}", missing)
