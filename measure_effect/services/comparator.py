"""
Pre/post appointment rate comparison around a revision's execution date.

A revision is compared on up to two independent components:

- Talk improvement: the script changes at the execution date, so the pre
  window is filtered on the pre-fix script name and the post window on the
  post-fix script name.
- Data deletion: the list keeps its name and only its contents change, so
  both windows are filtered on the same deleted list name.

The split date always belongs to the post window. How far the windows reach
is chosen by the caller:

- calendar_month_split: month start .. execution date .. next month start
  (client detail view)
- fixed_day_split: N days either side of the execution date
  (monthly summary table)

The pre and post rates of a component are fetched concurrently.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional

from measure_effect.models.enums import (
    ComparisonKind,
    DimensionColumn,
    EmptyRatePolicy,
    MeasureCategory,
)
from measure_effect.models.schemas import CampaignRevision, ComparisonResponse
from measure_effect.services.data_source import CallResultsSource
from measure_effect.services.periods import fixed_window, month_bounds
from measure_effect.services.rate_calculator import RateStats, calculate_rate, format_rate
from measure_effect.services.revision_classifier import has_data_cleanup, has_talk_improvement


logger = logging.getLogger(__name__)


# =============================================================================
# Windows
# =============================================================================


@dataclass(frozen=True)
class SplitWindow:
    """Pre window [pre_start, split) and post window [split, post_end)."""
    pre_start: date
    split: date
    post_end: date


def calendar_month_split(execution_date: date) -> SplitWindow:
    """Split the calendar month containing execution_date at execution_date."""
    month_start, next_month_start = month_bounds(execution_date)
    return SplitWindow(pre_start=month_start, split=execution_date, post_end=next_month_start)


def fixed_day_split(execution_date: date, days: int) -> SplitWindow:
    """Use `days` days before and after execution_date."""
    pre_start, post_end = fixed_window(execution_date, days)
    return SplitWindow(pre_start=pre_start, split=execution_date, post_end=post_end)


# =============================================================================
# Comparison Results
# =============================================================================


@dataclass
class PrePostComparison:
    """Rates before and after a revision for one component."""
    pre: RateStats
    post: RateStats

    @property
    def diff(self) -> Optional[float]:
        if self.pre.appointment_rate is None or self.post.appointment_rate is None:
            return None
        return self.post.appointment_rate - self.pre.appointment_rate

    @property
    def formatted_diff(self) -> Optional[str]:
        return format_rate(self.diff)

    def to_response(self) -> ComparisonResponse:
        return ComparisonResponse(
            preStats=self.pre.to_response(),
            postStats=self.post.to_response(),
            diff=self.formatted_diff,
        )


@dataclass(frozen=True)
class ComparisonTarget:
    """Which column and values one component of a revision is measured on."""
    kind: ComparisonKind
    dimension: DimensionColumn
    pre_value: str
    post_value: str


def comparison_targets(revision: CampaignRevision, category: MeasureCategory) -> List[ComparisonTarget]:
    """
    List the components a revision of the given category is measured on.

    A revision categorized as both yields a talk improvement target and a
    data deletion target; "other" yields none.
    """
    targets: List[ComparisonTarget] = []

    if has_talk_improvement(category):
        targets.append(ComparisonTarget(
            kind=ComparisonKind.TALK_IMPROVEMENT,
            dimension=DimensionColumn.SCRIPT,
            pre_value=revision.pre_fix_talk_list_name,
            post_value=revision.post_fix_talk_list_name,
        ))

    if has_data_cleanup(category):
        targets.append(ComparisonTarget(
            kind=ComparisonKind.DATA_DELETION,
            dimension=DimensionColumn.LIST,
            pre_value=revision.deleted_list_name,
            post_value=revision.deleted_list_name,
        ))

    return targets


# =============================================================================
# Comparison
# =============================================================================


async def compare_pre_post(
    source: CallResultsSource,
    client_name: str,
    target: ComparisonTarget,
    window: SplitWindow,
    policy: EmptyRatePolicy,
) -> PrePostComparison:
    """
    Compute the pre and post rates of one component concurrently.

    Args:
        source: Data source to read call_results from.
        client_name: Client the revision belongs to.
        target: Column and values for the pre and post windows.
        window: Date ranges split at the execution date.
        policy: Result for a window without calls.

    Returns:
        PrePostComparison with both sides.

    Raises:
        UpstreamFetchError: If either fetch fails.
    """
    pre, post = await asyncio.gather(
        calculate_rate(
            source, client_name, target.dimension, target.pre_value,
            window.pre_start, window.split, policy,
        ),
        calculate_rate(
            source, client_name, target.dimension, target.post_value,
            window.split, window.post_end, policy,
        ),
    )
    return PrePostComparison(pre=pre, post=post)


async def compare_revision(
    source: CallResultsSource,
    revision: CampaignRevision,
    category: MeasureCategory,
    window: SplitWindow,
    policy: EmptyRatePolicy,
) -> Dict[ComparisonKind, PrePostComparison]:
    """
    Run every applicable comparison for a revision.

    Any fetch error propagates; callers that must tolerate partial failure
    iterate comparison_targets() and call compare_pre_post() themselves.

    Returns:
        Mapping of component kind to its comparison; empty for "other".
    """
    targets = comparison_targets(revision, category)
    results = await asyncio.gather(*(
        compare_pre_post(source, revision.client_name, target, window, policy)
        for target in targets
    ))
    return {target.kind: result for target, result in zip(targets, results)}
