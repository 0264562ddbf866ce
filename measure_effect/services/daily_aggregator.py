"""
Daily aggregation of call_results rows by script and by list.

Turns the raw rows of one client/month into two nested mappings

    by_script: {script_name: {day: DailyTotals}}
    by_list:   {list_name:   {day: DailyTotals}}

and derives the Chart.js datasets the client detail view plots: per
script and per list, an appointment-rate line and a call-count bar.

Rows without a script or list name are kept under the sentinel labels
UNKNOWN_SCRIPT / UNKNOWN_LIST so no volume disappears from the totals.
Aggregation is a pandas groupby-sum, so the result does not depend on the
order rows arrive in.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List

import pandas as pd

from measure_effect.models.enums import ChartType, EmptyRatePolicy
from measure_effect.models.schemas import CallResultRecord, ChartDataSet, ChartPoint
from measure_effect.services.rate_calculator import appointment_rate, format_rate


# =============================================================================
# Constants
# =============================================================================

UNKNOWN_SCRIPT: str = "不明_script"
UNKNOWN_LIST: str = "不明_list"

SCRIPT_LABEL_PREFIX: str = "スクリプト"
LIST_LABEL_PREFIX: str = "リスト"
RATE_LABEL_SUFFIX: str = "アポ率"
CALLS_LABEL_SUFFIX: str = "架電数"

# Indexed by series position; wraps around when there are more series
CHART_PALETTE: List[str] = [
    "#4e79a7",
    "#f28e2b",
    "#e15759",
    "#76b7b2",
    "#59a14f",
    "#edc948",
    "#b07aa1",
    "#ff9da7",
    "#9c755f",
    "#bab0ac",
]

# Appended to the border color to get a 50% opaque fill
BACKGROUND_ALPHA: str = "80"


# =============================================================================
# Accumulators
# =============================================================================


@dataclass
class DailyTotals:
    """Calls and appointments for one dimension value on one day."""
    total_calls: int = 0
    appointments: int = 0

    def add(self, other: "DailyTotals") -> None:
        self.total_calls += other.total_calls
        self.appointments += other.appointments

    @property
    def rate(self) -> float:
        # Chart points never show "undetermined"; an empty day plots as 0%
        return appointment_rate(self.total_calls, self.appointments, EmptyRatePolicy.ZERO)


DimensionSeries = Dict[str, Dict[date, DailyTotals]]


@dataclass
class DailyAggregation:
    """Per-day totals keyed by script name and by list name."""
    by_script: DimensionSeries = field(default_factory=dict)
    by_list: DimensionSeries = field(default_factory=dict)


# =============================================================================
# Aggregation
# =============================================================================


def _group_by_day(frame: pd.DataFrame, column: str) -> DimensionSeries:
    """Sum call_count/appointment per (column value, operating_date)."""
    grouped = (
        frame
        .groupby([column, 'operating_date'], sort=True)[['call_count', 'appointment']]
        .sum()
    )

    series: DimensionSeries = {}
    for (name, day), totals in grouped.iterrows():
        series.setdefault(name, {})[day] = DailyTotals(
            total_calls=int(totals['call_count']),
            appointments=int(totals['appointment']),
        )
    return series


def aggregate_daily(rows: Iterable[CallResultRecord]) -> DailyAggregation:
    """
    Bucket call_results rows by day and by script/list.

    Args:
        rows: Rows of one client for the period being displayed.

    Returns:
        DailyAggregation with additive per-(value, day) totals.
    """
    records = [
        {
            'script_name': row.script_name or UNKNOWN_SCRIPT,
            'list_name': row.list_name or UNKNOWN_LIST,
            'operating_date': row.operating_date,
            'call_count': row.call_count,
            'appointment': row.appointment,
        }
        for row in rows
    ]
    if not records:
        return DailyAggregation()

    frame = pd.DataFrame.from_records(records)

    return DailyAggregation(
        by_script=_group_by_day(frame, 'script_name'),
        by_list=_group_by_day(frame, 'list_name'),
    )


def totals_by_value(series: DimensionSeries) -> Dict[str, DailyTotals]:
    """Collapse the daily series of each dimension value into one total."""
    totals: Dict[str, DailyTotals] = {}
    for name, days in series.items():
        accumulator = DailyTotals()
        for day_totals in days.values():
            accumulator.add(day_totals)
        totals[name] = accumulator
    return totals


# =============================================================================
# Chart Datasets
# =============================================================================


def _dataset(label: str, points: List[ChartPoint], chart_type: ChartType, position: int) -> ChartDataSet:
    color = CHART_PALETTE[position % len(CHART_PALETTE)]
    return ChartDataSet(
        label=label,
        data=points,
        borderColor=color,
        backgroundColor=f"{color}{BACKGROUND_ALPHA}",
        type=chart_type,
        fill=chart_type == ChartType.BAR,
    )


def build_chart_datasets(aggregation: DailyAggregation) -> List[ChartDataSet]:
    """
    Build rate (line) and call-count (bar) datasets for every script and list.

    Scripts come first, then lists; within each, values are sorted by name
    and points by date, so the output is deterministic.

    Args:
        aggregation: Output of aggregate_daily().

    Returns:
        Up to 2 * (scripts + lists) datasets.
    """
    datasets: List[ChartDataSet] = []

    for prefix, series in (
        (SCRIPT_LABEL_PREFIX, aggregation.by_script),
        (LIST_LABEL_PREFIX, aggregation.by_list),
    ):
        for name in sorted(series):
            days = sorted(series[name].items())

            rate_points = [
                ChartPoint(x=day.isoformat(), y=format_rate(totals.rate))
                for day, totals in days
            ]
            call_points = [
                ChartPoint(x=day.isoformat(), y=str(totals.total_calls))
                for day, totals in days
            ]

            datasets.append(_dataset(
                f"{prefix}: {name} ({RATE_LABEL_SUFFIX})", rate_points, ChartType.LINE, len(datasets)
            ))
            datasets.append(_dataset(
                f"{prefix}: {name} ({CALLS_LABEL_SUFFIX})", call_points, ChartType.BAR, len(datasets)
            ))

    return datasets
