"""
Monthly summary of all campaign revisions executed in a month.

For every revision (any client) executed in the selected month, this
service classifies the revision and compares appointment rates over a
fixed number of days before and after its execution date. Windows without
calls are reported as undetermined (None) rather than 0%.

Note that this table uses a fixed day window while the client detail view
uses calendar-month windows for the same comparison; the two views are
kept as they are and may show different numbers for one revision.

Failure isolation:
- The revision fetch is required: its failure fails the whole summary.
- A failed rate fetch for one component of one revision is logged and
  leaves that component's rates as None; other rows are unaffected.
"""

import asyncio
import logging
from datetime import date
from typing import List, Optional

from measure_effect.core.exceptions import UpstreamFetchError
from measure_effect.models.enums import ComparisonKind, EmptyRatePolicy
from measure_effect.models.schemas import CampaignRevision, MonthlySummaryRow
from measure_effect.services.comparator import (
    ComparisonTarget,
    PrePostComparison,
    SplitWindow,
    compare_pre_post,
    comparison_targets,
    fixed_day_split,
)
from measure_effect.services.data_source import CallResultsSource
from measure_effect.services.periods import month_bounds
from measure_effect.services.revision_classifier import classify_revision


logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS: int = 30


async def _safe_compare(
    source: CallResultsSource,
    revision: CampaignRevision,
    target: ComparisonTarget,
    window: SplitWindow,
) -> Optional[PrePostComparison]:
    """Compare one component, downgrading a fetch failure to None."""
    try:
        return await compare_pre_post(
            source, revision.client_name, target, window, EmptyRatePolicy.UNDETERMINED
        )
    except UpstreamFetchError as e:
        logger.warning(
            f"Error calculating {target.kind.value} rates for {revision.client_name} "
            f"({revision.execution_date}): {e}"
        )
        return None


async def summarize_revision(
    source: CallResultsSource,
    revision: CampaignRevision,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> MonthlySummaryRow:
    """
    Build the summary row of one revision.

    Args:
        source: Data source to read call_results from.
        revision: Revision to summarize.
        window_days: Days before and after the execution date to compare.

    Returns:
        MonthlySummaryRow; rates are None where undetermined or failed.
    """
    category = classify_revision(revision)
    window = fixed_day_split(revision.execution_date, window_days)
    targets = comparison_targets(revision, category)

    results = await asyncio.gather(*(
        _safe_compare(source, revision, target, window) for target in targets
    ))
    comparisons = {target.kind: result for target, result in zip(targets, results)}

    talk = comparisons.get(ComparisonKind.TALK_IMPROVEMENT)
    deletion = comparisons.get(ComparisonKind.DATA_DELETION)

    return MonthlySummaryRow(
        client_name=revision.client_name,
        execution_date=revision.execution_date,
        measure_name=category,
        talk_improvement_pre_rate=talk.pre.formatted_rate if talk else None,
        talk_improvement_post_rate=talk.post.formatted_rate if talk else None,
        talk_improvement_diff=talk.formatted_diff if talk else None,
        data_deletion_pre_rate=deletion.pre.formatted_rate if deletion else None,
        data_deletion_post_rate=deletion.post.formatted_rate if deletion else None,
        data_deletion_diff=deletion.formatted_diff if deletion else None,
        pre_fix_talk_list_name=revision.pre_fix_talk_list_name,
        post_fix_talk_list_name=revision.post_fix_talk_list_name,
        deleted_list_name=revision.deleted_list_name,
    )


async def build_monthly_summary(
    source: CallResultsSource,
    month_start: date,
    window_days: int = DEFAULT_WINDOW_DAYS,
) -> List[MonthlySummaryRow]:
    """
    Summarize every revision executed in the month starting at month_start.

    Revisions are processed concurrently.

    Args:
        source: Data source for revisions and call_results.
        month_start: First day of the selected month.
        window_days: Days before and after each execution date to compare.

    Returns:
        Summary rows sorted by execution date, then client name.

    Raises:
        UpstreamFetchError: If the revisions themselves cannot be fetched.
    """
    start, end = month_bounds(month_start)
    revisions = await source.fetch_revisions(start, end)
    logger.info(f"Fetched {len(revisions)} campaign revisions for [{start}, {end})")

    rows = await asyncio.gather(*(
        summarize_revision(source, revision, window_days) for revision in revisions
    ))

    return sorted(rows, key=lambda row: (row.execution_date, row.client_name))
