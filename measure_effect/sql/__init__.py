"""
SQL Query Module for the Measure Effect backend.

Provides parameterized SQL queries for the call_results and
campaign_revisions datasets. Query functions are re-exported here so callers
can import from measure_effect.sql directly.

Example usage:
    from measure_effect.sql import get_call_results_query
    from measure_effect.models.enums import DimensionColumn

    sql = get_call_results_query(DimensionColumn.SCRIPT)
"""

from measure_effect.sql.call_result_queries import (
    get_call_results_query,
    get_revisions_query,
    CALL_RESULTS_TABLE,
    CAMPAIGN_REVISIONS_TABLE,
)

__all__ = [
    'get_call_results_query',
    'get_revisions_query',
    'CALL_RESULTS_TABLE',
    'CAMPAIGN_REVISIONS_TABLE',
]
