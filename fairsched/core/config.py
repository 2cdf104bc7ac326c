"""
Core Configuration Module

Centralizes environment configuration for the scoring engine.
Provides a singleton Settings object with defaults suitable for in-process use.

Usage:
    from fairsched.core.config import settings

    print(settings.APP_ENV)
    print(settings.RANKING_TOP_N)
"""

import os
from typing import Optional

from fairsched.core.errors import ConfigurationError


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() == "true"


class Settings:
    """
    Engine settings loaded from environment variables.

    Values are read on access, so changes to the environment are picked up
    without rebuilding the object.
    """

    # ==================== Application Settings ====================

    @property
    def APP_ENV(self) -> str:
        """Application environment: dev, staging, production"""
        return os.getenv("APP_ENV", "dev")

    @property
    def LOG_LEVEL(self) -> str:
        """Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL"""
        return os.getenv("LOG_LEVEL", "INFO")

    # ==================== Ranking Settings ====================

    @property
    def RANKING_TOP_N(self) -> int:
        """Number of candidates returned in RankingResult.recommended"""
        raw = os.getenv("RANKING_TOP_N", "5")
        try:
            value = int(raw)
        except ValueError:
            raise ConfigurationError(
                f"RANKING_TOP_N must be an integer, got {raw!r}",
                details={"variable": "RANKING_TOP_N", "value": raw}
            )
        if value < 1:
            raise ConfigurationError(
                f"RANKING_TOP_N must be at least 1, got {value}",
                details={"variable": "RANKING_TOP_N", "value": raw}
            )
        return value

    # ==================== Feature Flags ====================

    @property
    def ENABLE_FAIRNESS(self) -> bool:
        """Apply fairness adjustments when ranking candidates"""
        return _env_flag("ENABLE_FAIRNESS", "true")

    @property
    def ENABLE_VIP_WEIGHTING(self) -> bool:
        """Apply VIP priority weights when ranking candidates"""
        return _env_flag("ENABLE_VIP_WEIGHTING", "true")


# ==================== Singleton Instance ====================

_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Get the singleton Settings instance.

    Returns:
        Settings object with configuration values

    Example:
        >>> from fairsched.core.config import get_settings
        >>> settings = get_settings()
        >>> print(settings.APP_ENV)
        'dev'
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


# Convenience singleton for direct import
settings = get_settings()


# ==================== Helper Functions ====================

def is_production() -> bool:
    """
    Check if the engine is running in a production environment.

    Returns:
        True if APP_ENV is 'production' or 'prod'
    """
    env = settings.APP_ENV.lower()
    return env in ("production", "prod")


def is_development() -> bool:
    """Check if APP_ENV is 'dev' or 'development'."""
    env = settings.APP_ENV.lower()
    return env in ("dev", "development")
