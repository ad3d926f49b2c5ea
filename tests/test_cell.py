"""Tests for hour parsing and single-cell entry."""

from datetime import date

import pytest

from hourblocks.engine.cell import InvalidHourValue, commit_cell, parse_hours, recorded_diff
from hourblocks.models.hour_entry import HourField, HourPair, Mode


class TestParseHours:

    @pytest.mark.parametrize("raw,expected", [("4", 4.0), (" 7.5 ", 7.5), ("", 0.0), (None, 0.0), (3, 3.0), (0.25, 0.25)])
    def test_accepts_numbers(self, raw, expected):
        assert parse_hours(raw) == expected

    @pytest.mark.parametrize("raw", ["abc", "-1", -2, "nan", "inf", True])
    def test_rejects_invalid(self, raw):
        with pytest.raises(InvalidHourValue):
            parse_hours(raw)

    def test_clamp_turns_negative_into_zero(self):
        assert parse_hours("-3", clamp=True) == 0.0

    def test_invalid_hour_value_is_a_value_error(self):
        assert issubclass(InvalidHourValue, ValueError)


class TestCommitCell:

    def test_writes_active_field(self, fake_store):
        request = commit_cell(fake_store.write, "proj-a", date(2024, 1, 2), Mode.RECORD, "6")

        assert fake_store.writes == [request]
        assert request.field == HourField.RECORDED_HOURS.value
        assert request.value == 6

    def test_invalid_input_issues_no_write(self, fake_store):
        assert commit_cell(fake_store.write, "proj-a", date(2024, 1, 2), Mode.PLAN, "-1") is None
        assert fake_store.writes == []

    @pytest.mark.parametrize("mode,expected", [(Mode.PLAN, 0.0), (Mode.RECORD, None)])
    def test_blank_input_clears_cell(self, fake_store, mode, expected):
        request = commit_cell(fake_store.write, "proj-a", date(2024, 1, 2), mode, "  ")

        assert fake_store.writes == [request]
        assert request.value == expected

    def test_write_errors_propagate(self, week, failing_store):
        with pytest.raises(RuntimeError):
            commit_cell(failing_store.write, "proj-a", week[2], Mode.PLAN, "1")


class TestRecordedDiff:

    def test_over_plan(self):
        assert recorded_diff(HourPair(planned=4, recorded=6)) == 2

    def test_missing_recording_counts_as_zero(self):
        assert recorded_diff(HourPair(planned=4, recorded=None)) == -4

    def test_no_plan_no_diff(self):
        assert recorded_diff(HourPair(planned=0, recorded=3)) is None
