"""
Date range helpers for month selection and pre/post windows.

All ranges are half-open: (start, end) means start <= day < end.
"""

import re
from datetime import date, timedelta
from typing import Optional, Tuple

from measure_effect.core.exceptions import ParameterValidationError


_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

DateRange = Tuple[date, date]


def parse_month(month: Optional[str]) -> date:
    """
    Parse a "YYYY-MM" query value into the first day of that month.

    Raises:
        ParameterValidationError: If the value is missing or not a valid month.
    """
    if not month:
        raise ParameterValidationError("Month is required")

    match = _MONTH_PATTERN.match(month.strip())
    if not match:
        raise ParameterValidationError(f"Month must be formatted as YYYY-MM, got '{month}'")

    year, month_number = int(match.group(1)), int(match.group(2))
    if not 1 <= month_number <= 12:
        raise ParameterValidationError(f"Month must be between 01 and 12, got '{month}'")

    return date(year, month_number, 1)


def month_bounds(day: date) -> DateRange:
    """Return [first day of day's month, first day of the following month)."""
    month_start = day.replace(day=1)
    if month_start.month == 12:
        next_month_start = date(month_start.year + 1, 1, 1)
    else:
        next_month_start = date(month_start.year, month_start.month + 1, 1)
    return month_start, next_month_start


def fixed_window(execution_date: date, days: int) -> DateRange:
    """Return [execution_date - days, execution_date + days)."""
    span = timedelta(days=days)
    return execution_date - span, execution_date + span
