"""
FastAPI router module for the monthly summary table.

Key Endpoints:
- GET /monthly-summary?month=YYYY-MM: one row per campaign revision executed
  in the month, with talk improvement and data deletion before/after rates

Rates are compared over a fixed window (SUMMARY_WINDOW_DAYS, default 30)
either side of each execution date. Rates that cannot be determined, or
whose fetch failed, are returned as null and shown as a dash by the UI.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from measure_effect.core.dependencies import DataSourceDep, SettingsDep
from measure_effect.core.exceptions import ParameterValidationError
from measure_effect.models.schemas import MonthlySummaryRow
from measure_effect.services.monthly_summary import build_monthly_summary
from measure_effect.services.periods import parse_month


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    '/monthly-summary',
    response_model=List[MonthlySummaryRow],
    summary="Get Monthly Summary",
    description="""
    List every campaign revision executed in the selected month with its
    measure category and before/after appointment rates.

    Rows are sorted by execution date, then client name.
    """
)
async def get_monthly_summary(
    source: DataSourceDep,
    settings: SettingsDep,
    month: Optional[str] = Query(default=None, description="Month to summarize, YYYY-MM"),
) -> List[MonthlySummaryRow]:
    """
    Build the monthly summary table.

    Args:
        source: Data source from dependency injection.
        settings: Application settings (summary window length).
        month: Selected month, YYYY-MM.

    Returns:
        List of MonthlySummaryRow.

    Raises:
        HTTPException 400: If month is missing or malformed.
        HTTPException 500: If the revisions cannot be fetched.
    """
    try:
        month_start = parse_month(month)
    except ParameterValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Building monthly summary for month={month}")

    try:
        rows = await build_monthly_summary(source, month_start, settings.summary_window_days)
    except Exception as e:
        logger.error(f"Error in monthly summary for month={month}: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build monthly summary: {str(e)}"
        )

    logger.info(f"Built {len(rows)} summary rows for month={month}")
    return rows
