"""
Core Errors Module

Standardized error classes for the scoring engine.

Scoring functions never raise on well-typed input. Errors are raised only at
the boundary: when mapping input cannot be validated into the engine's models,
or when environment configuration is unusable.

Usage:
    from fairsched.core.errors import ValidationError

    raise ValidationError("Invalid history entry", details={"field": "sessions_preferred"})
"""

import logging
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


# ==================== Base Error Class ====================

class AppError(Exception):
    """
    Base engine error class.

    Attributes:
        code: Error code (e.g., "validation_error")
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self._default_code()
        self.details = details or {}

    def _default_code(self) -> str:
        """
        Generate default error code from class name.

        Returns:
            snake_case version of class name without the "Error" suffix
        """
        name = self.__class__.__name__
        if name.endswith("Error"):
            name = name[:-5]

        result = []
        for i, char in enumerate(name):
            if char.isupper() and i > 0:
                result.append("_")
            result.append(char.lower())

        return "".join(result)

    def to_dict(self, trace_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Convert error to a dictionary for logging or audit records.

        Args:
            trace_id: Optional trace ID (scheduling session)

        Returns:
            Error dict with code, message, details, trace_id
        """
        result = {
            "code": self.code,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        if trace_id:
            result["trace_id"] = trace_id

        return result


# ==================== Specific Error Classes ====================

class ValidationError(AppError):
    """
    Validation error.

    Raised when mapping input cannot be converted into an engine model.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="validation_error",
            details=details
        )


class ConfigurationError(AppError):
    """Raised when an environment setting has an unusable value."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="configuration_error",
            details=details
        )


# ==================== Helper Functions ====================

def from_pydantic_error(e: Exception, model_name: str) -> ValidationError:
    """
    Convert a pydantic ValidationError into the engine's ValidationError.

    Args:
        e: pydantic.ValidationError raised during model validation
        model_name: Name of the model that failed validation

    Returns:
        ValidationError with the pydantic error list in details["errors"]
    """
    errors = []
    if hasattr(e, "errors"):
        errors = [
            {
                "loc": list(err.get("loc", ())),
                "msg": err.get("msg", ""),
                "type": err.get("type", ""),
            }
            for err in e.errors()
        ]

    logger.debug(f"Validation failed for {model_name}: {errors}")

    return ValidationError(
        message=f"Invalid {model_name} input",
        details={"model": model_name, "errors": errors}
    )
