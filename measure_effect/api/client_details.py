"""
FastAPI router module for the client detail view.

Key Endpoints:
- GET /client-details?client=<name>&month=YYYY-MM: daily rate and call
  volume series per script and list, revision markers with calendar-month
  before/after stats, month totals, and per-script/per-list aggregates

The view is all-or-nothing: any upstream failure returns 500 so the UI can
show its empty state instead of a partial chart.
"""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from measure_effect.core.dependencies import DataSourceDep
from measure_effect.core.exceptions import ParameterValidationError
from measure_effect.models.schemas import ClientDetailResponse
from measure_effect.services.client_detail import build_client_detail
from measure_effect.services.periods import parse_month


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    '/client-details',
    response_model=ClientDetailResponse,
    summary="Get Client Details",
    description="""
    Retrieve the drill-down data for one client and month: chart datasets,
    classified revisions with before/after stats, and aggregates by script
    and list.
    """
)
async def get_client_details(
    source: DataSourceDep,
    client: Optional[str] = Query(default=None, description="Exact client name"),
    month: Optional[str] = Query(default=None, description="Month to display, YYYY-MM"),
) -> ClientDetailResponse:
    """
    Build the client detail payload.

    Args:
        source: Data source from dependency injection.
        client: Client name.
        month: Selected month, YYYY-MM.

    Returns:
        ClientDetailResponse.

    Raises:
        HTTPException 400: If client or month is missing, or month is malformed.
        HTTPException 500: If any fetch fails.
    """
    if not client or not month:
        raise HTTPException(status_code=400, detail="Client and month are required")

    try:
        month_start = parse_month(month)
    except ParameterValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Building client details for client={client}, month={month}")

    try:
        detail = await build_client_detail(source, client, month_start)
    except Exception as e:
        logger.error(f"Error in client details for client={client}, month={month}: {str(e)}")
        raise HTTPException(
            status_code=500,
            detail=f"Failed to build client details: {str(e)}"
        )

    logger.info(
        f"Built client details for client={client}: {len(detail.chartDataSets)} datasets, "
        f"{len(detail.revisions)} revisions"
    )
    return detail
