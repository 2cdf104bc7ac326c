"""
Core Package

Centralized configuration, logging and error handling for the scoring engine.

Modules:
- config: Environment configuration and settings
- logging: Structured logging with trace_id support
- errors: Standardized error classes

Usage:
    from fairsched.core import settings, setup_logging, set_trace_id
    from fairsched.core import ValidationError
"""

# Errors
from fairsched.core.errors import (
    AppError,
    ValidationError,
    ConfigurationError,
    from_pydantic_error
)

# Configuration
from fairsched.core.config import settings, get_settings, is_production, is_development

# Logging
from fairsched.core.logging import (
    setup_logging,
    set_trace_id,
    reset_trace_id,
    get_trace_id
)

__all__ = [
    # Config
    "settings",
    "get_settings",
    "is_production",
    "is_development",

    # Logging
    "setup_logging",
    "set_trace_id",
    "reset_trace_id",
    "get_trace_id",

    # Errors
    "AppError",
    "ValidationError",
    "ConfigurationError",
    "from_pydantic_error",
]
