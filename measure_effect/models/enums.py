"""
Enumeration definitions for the Measure Effect backend.

All enums inherit from both `str` and `Enum` so they serialize as their
plain values in Pydantic models and JSON responses.

The MeasureCategory values are the labels the dashboard displays and are
kept in Japanese to match the campaign revision data entered by operators.
"""

from enum import Enum


class MeasureCategory(str, Enum):
    """
    Category of a campaign revision, derived from which list fields are set.

    - BOTH: talk script swapped and a list cleaned up in the same revision
    - TALK_IMPROVEMENT: pre-fix and post-fix talk script names both set
    - DATA_CLEANUP: only a deleted list name set
    - OTHER: any other combination
    """
    BOTH = "両方実施"
    TALK_IMPROVEMENT = "トーク改善"
    DATA_CLEANUP = "不要データ削除"
    OTHER = "その他"


class DimensionColumn(str, Enum):
    """
    Categorical columns of call_results that rates can be filtered on.

    Values are the literal column names and are interpolated into SQL, so
    only members of this enum may reach the query builders.
    """
    SCRIPT = "script_name"
    LIST = "list_name"


class ComparisonKind(str, Enum):
    """
    The two independent before/after comparisons a revision can carry.

    - TALK_IMPROVEMENT: old script vs new script, filtered on script_name
    - DATA_DELETION: same list before vs after cleanup, filtered on list_name
    """
    TALK_IMPROVEMENT = "talk_improvement"
    DATA_DELETION = "data_deletion"


class EmptyRatePolicy(str, Enum):
    """
    What an appointment rate becomes when the window has no calls.

    - ZERO: treat as 0% (client detail view)
    - UNDETERMINED: leave as None so the UI shows a dash (monthly summary)
    """
    ZERO = "zero"
    UNDETERMINED = "undetermined"


class ChartType(str, Enum):
    """Chart.js dataset types used for the daily series."""
    LINE = "line"
    BAR = "bar"
