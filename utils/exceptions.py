"""
Custom exception hierarchy for spex.
"""
from typing import Any, Dict, Optional


class SpexError(Exception):
    """Base exception for all spex errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'details': self.details
        }


# Spec Exceptions
class SpecError(SpexError):
    """Raised when a spec is built with invalid options."""
    pass


class SpecUsageError(SpexError):
    """Raised when something other than a prepped spec is used for validation."""
    pass


class FrozenSpecError(SpexError, AttributeError):
    """Raised when a built spec is mutated."""
    pass


# Configuration Exceptions
class ConfigurationError(SpexError):
    """Raised when configuration is invalid."""
    pass
