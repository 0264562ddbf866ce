"""
Core infrastructure package for the FastAPI backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL connectivity via asyncpg
- FastAPI dependency injection utilities (measure_effect.core.dependencies)
- Error types shared by services and routers

Re-exports allow imports like:

    from measure_effect.core import get_settings, UpstreamFetchError

The dependencies module is imported directly by the API layer because it
depends on the services package, which itself uses the error types here.
"""

from measure_effect.core.config import Settings, get_settings
from measure_effect.core.database import init_db, close_db, get_db_pool
from measure_effect.core.exceptions import (
    MeasureEffectError,
    ParameterValidationError,
    UpstreamFetchError,
    ConfigurationError,
)

__all__ = [
    # Configuration management
    'Settings',
    'get_settings',
    # Database pool lifecycle
    'init_db',
    'close_db',
    'get_db_pool',
    # Errors
    'MeasureEffectError',
    'ParameterValidationError',
    'UpstreamFetchError',
    'ConfigurationError',
]
