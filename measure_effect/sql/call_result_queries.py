"""
Call Result Queries Module for the Measure Effect backend.

Provides parameterized PostgreSQL queries for the two datasets the service
reads: call_results (daily tallies per client/script/list) and
campaign_revisions (dated campaign changes).

Both datasets are filtered with inclusive-lower / exclusive-upper date
ranges. Date parameters are cast to DATE so the queries work whether the
underlying columns are DATE or TIMESTAMPTZ.

This module follows the Repository Pattern for clean separation between
business logic and data access.
"""

from typing import Optional

from measure_effect.models.enums import DimensionColumn


# =============================================================================
# CONSTANTS
# =============================================================================

CALL_RESULTS_TABLE: str = "call_results"
CAMPAIGN_REVISIONS_TABLE: str = "campaign_revisions"


# =============================================================================
# CALL RESULTS
# =============================================================================

def get_call_results_query(dimension: Optional[DimensionColumn] = None) -> str:
    """
    Generate SQL to fetch call_results rows for a client and date range.

    Parameters:
        $1 client_name, $2 range start (inclusive), $3 range end (exclusive),
        $4 dimension value (only when dimension is given).

    Args:
        dimension: Optional script/list column to filter on by exact match.

    Returns:
        Parameterized PostgreSQL query string, ordered by operating_date.

    Raises:
        ValueError: If dimension is not a DimensionColumn.
    """
    dimension_filter = ""
    if dimension is not None:
        # Column names cannot be bound as parameters; only enum members pass
        column = DimensionColumn(dimension).value
        dimension_filter = f"\n          AND {column} = $4"

    return f"""
        SELECT
            client_name,
            script_name,
            list_name,
            operating_date,
            call_count,
            appointment
        FROM {CALL_RESULTS_TABLE}
        WHERE client_name = $1
          AND operating_date >= $2::date
          AND operating_date < $3::date{dimension_filter}
        ORDER BY operating_date ASC
    """


# =============================================================================
# CAMPAIGN REVISIONS
# =============================================================================

def get_revisions_query(by_client: bool = False) -> str:
    """
    Generate SQL to fetch campaign_revisions executed within a date range.

    Parameters:
        $1 range start (inclusive), $2 range end (exclusive),
        $3 client_name (only when by_client is True).

    Args:
        by_client: Restrict the result to a single client.

    Returns:
        Parameterized PostgreSQL query string, ordered by execution_date then client.
    """
    client_filter = "\n          AND client_name = $3" if by_client else ""

    return f"""
        SELECT
            client_name,
            execution_date,
            pre_fix_talk_list_name,
            post_fix_talk_list_name,
            deleted_list_name
        FROM {CAMPAIGN_REVISIONS_TABLE}
        WHERE execution_date >= $1::date
          AND execution_date < $2::date{client_filter}
        ORDER BY execution_date ASC, client_name ASC
    """
