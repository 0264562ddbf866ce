"""
FastAPI dependency injection module for the Measure Effect backend.

Provides the settings singleton and the data source to endpoint handlers.
Both can be replaced in tests through app.dependency_overrides, e.g.

    app.dependency_overrides[get_data_source] = lambda: fake_source

Key Dependencies Provided:
- get_settings_dependency / SettingsDep: the cached Settings instance
- get_data_source / DataSourceDep: a CallResultsSource over the asyncpg pool
"""

from typing import Annotated

from fastapi import Depends

from measure_effect.core.config import Settings, get_settings
from measure_effect.services.data_source import CallResultsSource, PostgresCallResultsSource


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    Thin wrapper around get_settings() so tests can override it.
    """
    return get_settings()


# =============================================================================
# Data Source Dependency
# =============================================================================

def get_data_source() -> CallResultsSource:
    """
    Return a CallResultsSource backed by the shared connection pool.

    The pool is only touched when the first query runs, so request
    validation always happens before any database access.
    """
    return PostgresCallResultsSource()


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

# Usage: async def endpoint(source: DataSourceDep)
DataSourceDep = Annotated[CallResultsSource, Depends(get_data_source)]
