"""
Appointment rate calculation over call_results rows.

appointment rate = appointments / calls * 100

Rates stay floats internally so pre/post differences can be computed, and
are only formatted to two-decimal strings at the response boundary.

What a window without calls yields depends on the caller (EmptyRatePolicy):
the client detail view shows 0%, the monthly summary shows "undetermined"
(None).
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from measure_effect.models.enums import DimensionColumn, EmptyRatePolicy
from measure_effect.models.schemas import CallResultRecord, RateStatsResponse
from measure_effect.services.data_source import CallResultsSource


logger = logging.getLogger(__name__)


def format_rate(rate: Optional[float]) -> Optional[str]:
    """Format a rate or difference with two decimals; None stays None."""
    if rate is None:
        return None
    return f"{rate:.2f}"


def appointment_rate(
    total_calls: int,
    total_appointments: int,
    policy: EmptyRatePolicy = EmptyRatePolicy.ZERO,
) -> Optional[float]:
    """
    Compute appointments / calls * 100 without ever dividing by zero.

    Returns 0.0 or None for zero calls depending on policy.
    """
    if total_calls <= 0:
        return 0.0 if policy == EmptyRatePolicy.ZERO else None
    return total_appointments / total_calls * 100


@dataclass
class RateStats:
    """
    Summed call volume and appointment rate for one window.

    Attributes:
        total_calls: Sum of call_count.
        total_appointments: Sum of appointment.
        appointment_rate: Percentage, or None when undetermined.
    """
    total_calls: int = 0
    total_appointments: int = 0
    appointment_rate: Optional[float] = None

    @property
    def formatted_rate(self) -> Optional[str]:
        return format_rate(self.appointment_rate)

    def to_response(self) -> RateStatsResponse:
        return RateStatsResponse(
            totalCalls=self.total_calls,
            totalAppointments=self.total_appointments,
            appointmentRate=self.formatted_rate,
        )


def summarize_rows(
    rows: Iterable[CallResultRecord],
    policy: EmptyRatePolicy = EmptyRatePolicy.ZERO,
) -> RateStats:
    """
    Sum call_count and appointment over rows and derive the rate.

    Args:
        rows: Call result rows, already filtered to the window of interest.
        policy: Result for a window without calls.

    Returns:
        RateStats for the rows.
    """
    total_calls = 0
    total_appointments = 0
    for row in rows:
        total_calls += row.call_count
        total_appointments += row.appointment

    return RateStats(
        total_calls=total_calls,
        total_appointments=total_appointments,
        appointment_rate=appointment_rate(total_calls, total_appointments, policy),
    )


async def calculate_rate(
    source: CallResultsSource,
    client_name: str,
    dimension: DimensionColumn,
    value: str,
    start: date,
    end: date,
    policy: EmptyRatePolicy,
) -> RateStats:
    """
    Fetch the rows of one script or list over [start, end) and compute the rate.

    Args:
        source: Data source to read call_results from.
        client_name: Exact client name.
        dimension: Column to filter on (script_name or list_name).
        value: Exact script or list name.
        start: First day included.
        end: First day excluded.
        policy: Result for a window without calls.

    Returns:
        RateStats for the window.

    Raises:
        UpstreamFetchError: Propagated from the data source; callers decide
            whether it is fatal.
    """
    rows = await source.fetch_call_results(
        client_name, start, end, dimension=dimension, value=value
    )
    stats = summarize_rows(rows, policy)

    logger.debug(
        f"Rate for client={client_name}, {dimension.value}={value}, "
        f"range=[{start}, {end}): {stats.total_appointments}/{stats.total_calls} "
        f"-> {stats.formatted_rate}"
    )
    return stats
