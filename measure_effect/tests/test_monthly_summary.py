"""
Test suite for the monthly summary table.

The tests verify:
1. All revisions of the month are listed, sorted by date then client
2. Rates use a fixed window either side of the execution date
3. Windows without calls are undetermined (None), not 0%
4. A failed rate fetch only blanks the affected component
5. A failed revision fetch fails the whole summary
"""

from datetime import date

import pytest

from measure_effect.core.exceptions import UpstreamFetchError
from measure_effect.models.enums import DimensionColumn, MeasureCategory
from measure_effect.services.monthly_summary import (
    build_monthly_summary,
    summarize_revision,
)
from measure_effect.tests.conftest import make_revision


class TestSummarizeRevision:
    """Tests for summarize_revision()."""

    @pytest.mark.asyncio
    @pytest.mark.scenario
    async def test_talk_improvement_row(self, fake_source):
        revision = make_revision(date(2025, 7, 15), pre="ScriptOld", post="ScriptNew")

        row = await summarize_revision(fake_source, revision)

        assert row.measure_name == MeasureCategory.TALK_IMPROVEMENT
        assert row.talk_improvement_pre_rate == "5.00"
        assert row.talk_improvement_post_rate == "8.00"
        assert row.talk_improvement_diff == "3.00"
        assert row.data_deletion_pre_rate is None
        assert row.data_deletion_post_rate is None
        assert row.data_deletion_diff is None
        assert row.pre_fix_talk_list_name == "ScriptOld"

    @pytest.mark.asyncio
    async def test_default_windows_span_thirty_days(self, fake_source):
        revision = make_revision(date(2025, 7, 15), pre="ScriptOld", post="ScriptNew")

        await summarize_revision(fake_source, revision)

        assert sorted(fake_source.call_result_queries, key=lambda query: query[1]) == [
            ("Acme", date(2025, 6, 15), date(2025, 7, 15), DimensionColumn.SCRIPT, "ScriptOld"),
            ("Acme", date(2025, 7, 15), date(2025, 8, 14), DimensionColumn.SCRIPT, "ScriptNew"),
        ]

    @pytest.mark.asyncio
    async def test_window_length_is_configurable(self, fake_source):
        revision = make_revision(date(2025, 7, 15), deleted="ListY")

        await summarize_revision(fake_source, revision, window_days=7)

        windows = {(query[1], query[2]) for query in fake_source.call_result_queries}
        assert windows == {
            (date(2025, 7, 8), date(2025, 7, 15)),
            (date(2025, 7, 15), date(2025, 7, 22)),
        }

    @pytest.mark.asyncio
    async def test_no_calls_is_undetermined(self, fake_source):
        revision = make_revision(date(2025, 7, 3), deleted="ListZ", client="Beta")

        row = await summarize_revision(fake_source, revision)

        assert row.measure_name == MeasureCategory.DATA_CLEANUP
        assert row.data_deletion_pre_rate is None
        assert row.data_deletion_post_rate is None
        assert row.data_deletion_diff is None

    @pytest.mark.asyncio
    async def test_other_row_has_no_rates(self, fake_source):
        revision = make_revision(date(2025, 7, 3), pre="ScriptOld")

        row = await summarize_revision(fake_source, revision)

        assert row.measure_name == MeasureCategory.OTHER
        assert row.talk_improvement_pre_rate is None
        assert row.data_deletion_pre_rate is None
        assert fake_source.call_result_queries == []

    @pytest.mark.asyncio
    async def test_failed_component_is_blank_and_other_survives(self, fake_source, caplog):
        """A failing ScriptOld fetch blanks talk rates; deletion rates still compute."""
        fake_source.failing_values.add("ScriptOld")
        revision = make_revision(date(2025, 7, 15), pre="ScriptOld", post="ScriptNew", deleted="ListY")

        row = await summarize_revision(fake_source, revision)

        assert row.measure_name == MeasureCategory.BOTH
        assert row.talk_improvement_pre_rate is None
        assert row.talk_improvement_post_rate is None
        assert row.talk_improvement_diff is None
        assert row.data_deletion_pre_rate == "5.00"
        assert row.data_deletion_post_rate == "8.00"
        assert row.data_deletion_diff == "3.00"
        assert "talk_improvement" in caplog.text


class TestBuildMonthlySummary:
    """Tests for build_monthly_summary()."""

    @pytest.mark.asyncio
    async def test_rows_sorted_by_date_then_client(self, fake_source):
        fake_source.revisions = [
            make_revision(date(2025, 7, 15), pre="ScriptOld", post="ScriptNew"),
            make_revision(date(2025, 7, 3), deleted="ListZ", client="Beta"),
            make_revision(date(2025, 7, 3), client="Acme"),
        ]

        rows = await build_monthly_summary(fake_source, date(2025, 7, 1))

        assert [(row.execution_date, row.client_name) for row in rows] == [
            (date(2025, 7, 3), "Acme"),
            (date(2025, 7, 3), "Beta"),
            (date(2025, 7, 15), "Acme"),
        ]
        assert [row.measure_name for row in rows] == [
            MeasureCategory.OTHER,
            MeasureCategory.DATA_CLEANUP,
            MeasureCategory.TALK_IMPROVEMENT,
        ]

    @pytest.mark.asyncio
    async def test_fetches_revisions_of_all_clients_in_month(self, fake_source):
        fake_source.revisions = [
            make_revision(date(2025, 6, 30), deleted="ListX"),
            make_revision(date(2025, 7, 31), deleted="ListX"),
            make_revision(date(2025, 8, 1), deleted="ListX"),
        ]

        rows = await build_monthly_summary(fake_source, date(2025, 7, 1))

        assert fake_source.revision_queries == [(date(2025, 7, 1), date(2025, 8, 1), None)]
        assert [row.execution_date for row in rows] == [date(2025, 7, 31)]

    @pytest.mark.asyncio
    async def test_empty_month(self, fake_source):
        assert await build_monthly_summary(fake_source, date(2025, 7, 1)) == []

    @pytest.mark.asyncio
    async def test_one_failing_revision_does_not_fail_others(self, fake_source):
        fake_source.failing_values.add("ListX")
        fake_source.revisions = [
            make_revision(date(2025, 7, 2), deleted="ListX"),
            make_revision(date(2025, 7, 15), pre="ScriptOld", post="ScriptNew"),
        ]

        rows = await build_monthly_summary(fake_source, date(2025, 7, 1))

        assert len(rows) == 2
        assert rows[0].data_deletion_diff is None
        assert rows[1].talk_improvement_diff == "3.00"

    @pytest.mark.asyncio
    async def test_revision_fetch_failure_is_fatal(self, fake_source):
        fake_source.fail_revisions = True

        with pytest.raises(UpstreamFetchError):
            await build_monthly_summary(fake_source, date(2025, 7, 1))
