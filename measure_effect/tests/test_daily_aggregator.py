"""
Test suite for daily aggregation and chart dataset generation.

The tests verify:
1. Per-(value, day) totals are additive and order independent
2. Missing script/list names fall under the sentinel labels
3. Timestamps are bucketed by calendar day
4. Chart datasets come out in a deterministic order with palette colors
"""

from datetime import date, datetime
from itertools import permutations

import pytest

from measure_effect.models.enums import ChartType
from measure_effect.models.schemas import CallResultRecord
from measure_effect.services.daily_aggregator import (
    BACKGROUND_ALPHA,
    CHART_PALETTE,
    UNKNOWN_LIST,
    UNKNOWN_SCRIPT,
    DailyAggregation,
    DailyTotals,
    aggregate_daily,
    build_chart_datasets,
    totals_by_value,
)
from measure_effect.tests.conftest import make_row


# =============================================================================
# AGGREGATION
# =============================================================================


class TestAggregateDaily:
    """Tests for aggregate_daily()."""

    @pytest.mark.scenario
    def test_script_totals_over_two_days(self):
        """Script A: 100/10 on 07-01 and 50/10 on 07-02 -> 150/20, 13.33%."""
        rows = [
            make_row(date(2025, 7, 1), script="A", calls=100, appointments=10),
            make_row(date(2025, 7, 2), script="A", calls=50, appointments=10),
        ]

        aggregation = aggregate_daily(rows)

        assert aggregation.by_script["A"] == {
            date(2025, 7, 1): DailyTotals(total_calls=100, appointments=10),
            date(2025, 7, 2): DailyTotals(total_calls=50, appointments=10),
        }
        total = totals_by_value(aggregation.by_script)["A"]
        assert (total.total_calls, total.appointments) == (150, 20)

    def test_same_day_rows_are_summed(self):
        rows = [
            make_row(date(2025, 7, 1), script="A", list_name="L1", calls=30, appointments=3),
            make_row(date(2025, 7, 1), script="A", list_name="L2", calls=20, appointments=1),
        ]

        aggregation = aggregate_daily(rows)

        assert aggregation.by_script["A"][date(2025, 7, 1)] == DailyTotals(50, 4)
        assert aggregation.by_list["L1"][date(2025, 7, 1)] == DailyTotals(30, 3)
        assert aggregation.by_list["L2"][date(2025, 7, 1)] == DailyTotals(20, 1)

    def test_missing_names_use_sentinels(self):
        rows = [make_row(date(2025, 7, 1), script=None, list_name=None, calls=10, appointments=1)]

        aggregation = aggregate_daily(rows)

        assert list(aggregation.by_script) == [UNKNOWN_SCRIPT]
        assert list(aggregation.by_list) == [UNKNOWN_LIST]
        assert UNKNOWN_SCRIPT == "不明_script"
        assert UNKNOWN_LIST == "不明_list"

    def test_timestamps_are_bucketed_by_day(self):
        rows = [
            CallResultRecord(
                client_name="Acme", script_name="A", list_name="L",
                operating_date=datetime(2025, 7, 1, 9, 30), call_count=10, appointment=1,
            ),
            CallResultRecord(
                client_name="Acme", script_name="A", list_name="L",
                operating_date="2025-07-01T18:00:00+09:00", call_count=5, appointment=1,
            ),
        ]

        aggregation = aggregate_daily(rows)

        assert aggregation.by_script["A"] == {date(2025, 7, 1): DailyTotals(15, 2)}

    def test_result_does_not_depend_on_row_order(self, acme_rows):
        expected = aggregate_daily(acme_rows)

        for ordering in permutations(acme_rows):
            assert aggregate_daily(list(ordering)) == expected

    def test_empty_input(self):
        assert aggregate_daily([]) == DailyAggregation()


class TestDailyTotals:
    """Tests for the DailyTotals accumulator."""

    def test_zero_call_day_has_zero_rate(self):
        assert DailyTotals(0, 0).rate == 0.0

    def test_add(self):
        totals = DailyTotals(10, 1)
        totals.add(DailyTotals(5, 2))
        assert totals == DailyTotals(15, 3)


# =============================================================================
# CHART DATASETS
# =============================================================================


class TestBuildChartDatasets:
    """Tests for build_chart_datasets()."""

    def test_two_datasets_per_script_and_list(self, acme_rows):
        datasets = build_chart_datasets(aggregate_daily(acme_rows))

        # scripts A, ScriptNew, ScriptOld and lists ListX, ListY
        assert len(datasets) == 10
        assert [dataset.label for dataset in datasets[:2]] == [
            "スクリプト: A (アポ率)",
            "スクリプト: A (架電数)",
        ]
        assert datasets[6].label == "リスト: ListX (アポ率)"

    def test_rate_line_and_call_bar(self, acme_rows):
        rate, calls = build_chart_datasets(aggregate_daily(acme_rows))[:2]

        assert rate.type == ChartType.LINE
        assert rate.fill is False
        assert [(point.x, point.y) for point in rate.data] == [
            ("2025-07-01", "10.00"),
            ("2025-07-02", "20.00"),
        ]

        assert calls.type == ChartType.BAR
        assert calls.fill is True
        assert [(point.x, point.y) for point in calls.data] == [
            ("2025-07-01", "100"),
            ("2025-07-02", "50"),
        ]

    def test_zero_call_day_plots_zero_rate(self):
        rows = [make_row(date(2025, 7, 3), script="A", calls=0, appointments=0)]

        rate = build_chart_datasets(aggregate_daily(rows))[0]

        assert rate.data[0].y == "0.00"

    def test_points_are_sorted_by_date(self):
        rows = [
            make_row(date(2025, 7, 9), script="A"),
            make_row(date(2025, 7, 2), script="A"),
            make_row(date(2025, 7, 5), script="A"),
        ]

        rate = build_chart_datasets(aggregate_daily(rows))[0]

        assert [point.x for point in rate.data] == ["2025-07-02", "2025-07-05", "2025-07-09"]

    def test_colors_come_from_palette(self, acme_rows):
        datasets = build_chart_datasets(aggregate_daily(acme_rows))

        for position, dataset in enumerate(datasets):
            color = CHART_PALETTE[position % len(CHART_PALETTE)]
            assert dataset.borderColor == color
            assert dataset.backgroundColor == f"{color}{BACKGROUND_ALPHA}"

    def test_output_is_deterministic(self, acme_rows):
        first = build_chart_datasets(aggregate_daily(acme_rows))
        second = build_chart_datasets(aggregate_daily(list(reversed(acme_rows))))

        assert first == second

    def test_serialized_type_is_chart_js_name(self, acme_rows):
        dataset = build_chart_datasets(aggregate_daily(acme_rows))[0]

        assert dataset.model_dump(mode='json')['type'] == "line"

    def test_empty_aggregation_has_no_datasets(self):
        assert build_chart_datasets(DailyAggregation()) == []
