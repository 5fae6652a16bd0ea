"""Base exceptions for neo-identity.

All exceptions inherit from IdentityStoreError and carry an error code and
structured details so callers can log or translate them consistently.
"""

from typing import Any, Dict, Optional


class IdentityStoreError(Exception):
    """Base exception for all neo-identity errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


def create_error_response(exception: IdentityStoreError) -> Dict[str, Any]:
    """Create standardized error payload from exception.

    Args:
        exception: The neo-identity exception

    Returns:
        Error response dictionary
    """
    return {
        "error": {
            "code": exception.error_code,
            "message": exception.message,
            "details": exception.details,
            "type": exception.__class__.__name__,
        }
    }
