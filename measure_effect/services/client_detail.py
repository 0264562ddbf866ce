"""
Client detail view: daily series, revision markers and per-dimension stats.

For one client and month this service

1. fetches the client's call_results for the month and aggregates them by
   day and by script/list (chart datasets),
2. fetches the client's revisions executed in the month, classifies them
   and compares rates over the calendar month split at each execution date,
3. totals the month overall and per script/list, attaching a revision's
   before/after stats to the script or list it refers to.

Windows without calls are reported as 0% here. Unlike the monthly
summary, any fetch failure is fatal: the view is either complete or not
rendered at all.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional

from measure_effect.models.enums import ComparisonKind, EmptyRatePolicy, MeasureCategory
from measure_effect.models.schemas import (
    CampaignRevision,
    ClientDetailResponse,
    ClientRevision,
    DimensionAggregate,
)
from measure_effect.services.comparator import (
    PrePostComparison,
    calendar_month_split,
    compare_revision,
)
from measure_effect.services.daily_aggregator import (
    DimensionSeries,
    aggregate_daily,
    build_chart_datasets,
    totals_by_value,
)
from measure_effect.services.data_source import CallResultsSource
from measure_effect.services.periods import month_bounds
from measure_effect.services.rate_calculator import appointment_rate, format_rate, summarize_rows
from measure_effect.services.revision_classifier import classify_revision


logger = logging.getLogger(__name__)


@dataclass
class RevisionEffect:
    """A revision with its category and calendar-month comparisons."""
    revision: CampaignRevision
    category: MeasureCategory
    comparisons: Dict[ComparisonKind, PrePostComparison] = field(default_factory=dict)

    @property
    def talk(self) -> Optional[PrePostComparison]:
        return self.comparisons.get(ComparisonKind.TALK_IMPROVEMENT)

    @property
    def deletion(self) -> Optional[PrePostComparison]:
        return self.comparisons.get(ComparisonKind.DATA_DELETION)

    def to_response(self) -> ClientRevision:
        primary = self.talk or self.deletion
        return ClientRevision(
            execution_date=self.revision.execution_date,
            measure_name=self.category,
            preMeasureStats=primary.pre.to_response() if primary else None,
            postMeasureStats=primary.post.to_response() if primary else None,
            talkImprovement=self.talk.to_response() if self.talk else None,
            dataDeletion=self.deletion.to_response() if self.deletion else None,
            pre_fix_talk_list_name=self.revision.pre_fix_talk_list_name,
            post_fix_talk_list_name=self.revision.post_fix_talk_list_name,
            deleted_list_name=self.revision.deleted_list_name,
        )


async def evaluate_revision(source: CallResultsSource, revision: CampaignRevision) -> RevisionEffect:
    """Classify a revision and compare it over its calendar month."""
    category = classify_revision(revision)
    comparisons = await compare_revision(
        source,
        revision,
        category,
        calendar_month_split(revision.execution_date),
        EmptyRatePolicy.ZERO,
    )
    return RevisionEffect(revision=revision, category=category, comparisons=comparisons)


def _aggregate(total_calls: int, total_appointments: int) -> DimensionAggregate:
    return DimensionAggregate(
        totalCalls=total_calls,
        totalAppointments=total_appointments,
        appointmentRate=format_rate(
            appointment_rate(total_calls, total_appointments, EmptyRatePolicy.ZERO)
        ),
    )


def build_script_aggregates(
    by_script: DimensionSeries,
    effects: List[RevisionEffect],
) -> Dict[str, DimensionAggregate]:
    """
    Month totals per script, with talk improvement stats where referenced.

    The first revision (by execution date) naming the script as its pre-fix
    or post-fix talk script supplies the execution date; the pre stats are
    attached to the pre-fix script and the post stats to the post-fix script.
    """
    aggregates: Dict[str, DimensionAggregate] = {}

    for name, totals in sorted(totals_by_value(by_script).items()):
        aggregate = _aggregate(totals.total_calls, totals.appointments)

        related = next(
            (
                effect for effect in effects
                if name in (
                    effect.revision.pre_fix_talk_list_name,
                    effect.revision.post_fix_talk_list_name,
                )
            ),
            None,
        )
        if related is not None:
            aggregate.execution_date = related.revision.execution_date
            if related.talk is not None:
                if related.revision.pre_fix_talk_list_name == name:
                    aggregate.preMeasureStats = related.talk.pre.to_response()
                if related.revision.post_fix_talk_list_name == name:
                    aggregate.postMeasureStats = related.talk.post.to_response()

        aggregates[name] = aggregate

    return aggregates


def build_list_aggregates(
    by_list: DimensionSeries,
    effects: List[RevisionEffect],
) -> Dict[str, DimensionAggregate]:
    """
    Month totals per list, with data deletion stats where referenced.

    The first revision (by execution date) whose deleted list is this list
    supplies the execution date and both before/after stats.
    """
    aggregates: Dict[str, DimensionAggregate] = {}

    for name, totals in sorted(totals_by_value(by_list).items()):
        aggregate = _aggregate(totals.total_calls, totals.appointments)

        related = next(
            (effect for effect in effects if effect.revision.deleted_list_name == name),
            None,
        )
        if related is not None:
            aggregate.execution_date = related.revision.execution_date
            if related.deletion is not None:
                aggregate.preMeasureStats = related.deletion.pre.to_response()
                aggregate.postMeasureStats = related.deletion.post.to_response()

        aggregates[name] = aggregate

    return aggregates


async def build_client_detail(
    source: CallResultsSource,
    client_name: str,
    month_start: date,
) -> ClientDetailResponse:
    """
    Build the drill-down payload for one client and month.

    Args:
        source: Data source for call_results and revisions.
        client_name: Exact client name.
        month_start: First day of the selected month.

    Returns:
        ClientDetailResponse; empty aggregates and zero totals when the
        client has no rows in the month.

    Raises:
        UpstreamFetchError: If any fetch fails.
    """
    start, end = month_bounds(month_start)

    rows = await source.fetch_call_results(client_name, start, end)
    logger.info(f"Fetched {len(rows)} call_results rows for client={client_name}, [{start}, {end})")

    aggregation = aggregate_daily(rows)
    chart_datasets = build_chart_datasets(aggregation)

    revisions = await source.fetch_revisions(start, end, client_name=client_name)
    revisions = sorted(revisions, key=lambda revision: revision.execution_date)
    logger.info(f"Fetched {len(revisions)} campaign revisions for client={client_name}")

    effects = list(await asyncio.gather(*(
        evaluate_revision(source, revision) for revision in revisions
    )))

    totals = summarize_rows(rows, EmptyRatePolicy.ZERO)

    return ClientDetailResponse(
        chartDataSets=chart_datasets,
        revisions=[effect.to_response() for effect in effects],
        totalAppointments=totals.total_appointments,
        totalCalls=totals.total_calls,
        appointmentRate=totals.formatted_rate,
        scriptAggregates=build_script_aggregates(aggregation.by_script, effects),
        listAggregates=build_list_aggregates(aggregation.by_list, effects),
    )
