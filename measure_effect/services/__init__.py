"""
Measure Effect Services Module

Business logic for the dashboard. Every service is stateless and reads
through an injected CallResultsSource, so it can be tested with an
in-memory fake.

Services (leaves first):
- periods: month parsing and pre/post window ranges
- data_source: read contracts and the PostgreSQL implementation
- rate_calculator: appointment rate over a filtered window
- daily_aggregator: per-day totals by script/list and chart datasets
- revision_classifier: measure category of a revision
- comparator: pre/post comparison split at the execution date
- monthly_summary: one row per revision in a month (fixed day windows)
- client_detail: drill-down for one client and month (calendar-month windows)
- narrative: placeholder chat/report text
- webhook_proxy: forwarding to the n8n webhook
"""

from measure_effect.services.periods import (
    parse_month,
    month_bounds,
    fixed_window,
)

from measure_effect.services.data_source import (
    CallResultsSource,
    PostgresCallResultsSource,
)

from measure_effect.services.rate_calculator import (
    RateStats,
    appointment_rate,
    calculate_rate,
    format_rate,
    summarize_rows,
)

from measure_effect.services.daily_aggregator import (
    DailyAggregation,
    DailyTotals,
    aggregate_daily,
    build_chart_datasets,
    totals_by_value,
    UNKNOWN_SCRIPT,
    UNKNOWN_LIST,
)

from measure_effect.services.revision_classifier import (
    classify_revision,
    has_talk_improvement,
    has_data_cleanup,
)

from measure_effect.services.comparator import (
    ComparisonTarget,
    PrePostComparison,
    SplitWindow,
    calendar_month_split,
    compare_pre_post,
    compare_revision,
    comparison_targets,
    fixed_day_split,
)

from measure_effect.services.monthly_summary import (
    build_monthly_summary,
    summarize_revision,
)

from measure_effect.services.client_detail import (
    RevisionEffect,
    build_client_detail,
    build_list_aggregates,
    build_script_aggregates,
    evaluate_revision,
)

from measure_effect.services.narrative import TemplateNarrator

from measure_effect.services.webhook_proxy import forward_to_webhook

__all__ = [
    'parse_month',
    'month_bounds',
    'fixed_window',
    'CallResultsSource',
    'PostgresCallResultsSource',
    'RateStats',
    'appointment_rate',
    'calculate_rate',
    'format_rate',
    'summarize_rows',
    'DailyAggregation',
    'DailyTotals',
    'aggregate_daily',
    'build_chart_datasets',
    'totals_by_value',
    'UNKNOWN_SCRIPT',
    'UNKNOWN_LIST',
    'classify_revision',
    'has_talk_improvement',
    'has_data_cleanup',
    'ComparisonTarget',
    'PrePostComparison',
    'SplitWindow',
    'calendar_month_split',
    'compare_pre_post',
    'compare_revision',
    'comparison_targets',
    'fixed_day_split',
    'build_monthly_summary',
    'summarize_revision',
    'RevisionEffect',
    'build_client_detail',
    'build_list_aggregates',
    'build_script_aggregates',
    'evaluate_revision',
    'TemplateNarrator',
    'forward_to_webhook',
]
