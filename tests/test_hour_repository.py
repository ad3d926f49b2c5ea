"""Tests for HourRepository (the SQLAlchemy hour-storage collaborator)."""

from datetime import date

import pytest
from unittest.mock import patch

from hourblocks.database.hour_repository import UserHourWriter
from hourblocks.database.models import HourEntryDB
from hourblocks.engine.block_editor import BlockEditor
from hourblocks.engine.block_detector import detect_blocks
from hourblocks.engine.hour_map import build_hour_map
from hourblocks.models.block import Block
from hourblocks.models.hour_entry import HourField, HourWrite, Mode


def _plan(project_id, day, value):
    return HourWrite(project_id=project_id, date=day, field=HourField.PLANNED_HOURS, value=value)


def _record(project_id, day, value):
    return HourWrite(project_id=project_id, date=day, field=HourField.RECORDED_HOURS, value=value)


class TestUpsert:

    def test_insert_defaults_other_field(self, hour_repository, test_user_id):
        entry = hour_repository.upsert(test_user_id, _record("proj-a", date(2024, 1, 2), 5))

        assert entry.recorded_hours == 5
        assert entry.planned_hours == 0
        assert entry.user_id == test_user_id

    def test_update_touches_only_target_field(self, hour_repository, test_user_id):
        day = date(2024, 1, 2)
        hour_repository.upsert(test_user_id, _plan("proj-a", day, 4))
        entry = hour_repository.upsert(test_user_id, _record("proj-a", day, 6))

        assert entry.planned_hours == 4
        assert entry.recorded_hours == 6
        assert hour_repository.db.query(HourEntryDB).count() == 1

    def test_one_row_per_user_project_day(self, hour_repository, test_user_id):
        day = date(2024, 1, 2)
        hour_repository.upsert(test_user_id, _plan("proj-a", day, 1))
        hour_repository.upsert(test_user_id, _plan("proj-a", day, 2))
        hour_repository.upsert("other-user", _plan("proj-a", day, 3))

        mine = hour_repository.list_range(test_user_id, day, day)
        assert len(mine) == 1
        assert mine[0].planned_hours == 2
        assert len(hour_repository.list_range_all(day, day)) == 2

    def test_failed_commit_rolls_back_and_raises(self, hour_repository, test_user_id):
        with patch.object(hour_repository.db, "commit", side_effect=RuntimeError("db down")):
            with pytest.raises(RuntimeError):
                hour_repository.upsert(test_user_id, _plan("proj-a", date(2024, 1, 2), 1))

        assert hour_repository.list_range(test_user_id, date(2024, 1, 1), date(2024, 1, 7)) == []


class TestListRange:

    def test_inclusive_range_for_user(self, hour_repository, test_user_id, week):
        for day in week:
            hour_repository.upsert(test_user_id, _plan("proj-a", day, 1))

        rows = hour_repository.list_range(test_user_id, week[1], week[3])

        assert [r.date for r in rows] == week[1:4]


class TestClear:

    def test_clear_plan_zeroes_and_keeps_rows(self, hour_repository, test_user_id, week):
        for day in week[:3]:
            hour_repository.upsert(test_user_id, _plan("proj-a", day, 2))
            hour_repository.upsert(test_user_id, _record("proj-a", day, 1))

        updated = hour_repository.clear(test_user_id, "proj-a", week[:2], Mode.PLAN)

        rows = hour_repository.list_range(test_user_id, week[0], week[2])
        assert updated == 2
        assert [r.planned_hours for r in rows] == [0, 0, 2]
        assert [r.recorded_hours for r in rows] == [1, 1, 1]

    def test_clear_record_nulls(self, hour_repository, test_user_id, week):
        hour_repository.upsert(test_user_id, _record("proj-a", week[0], 3))

        hour_repository.clear(test_user_id, "proj-a", [week[0]], Mode.RECORD)

        assert hour_repository.list_range(test_user_id, week[0], week[0])[0].recorded_hours is None

    def test_clear_nothing(self, hour_repository, test_user_id):
        assert hour_repository.clear(test_user_id, "proj-a", [], Mode.PLAN) == 0


class TestEditorAgainstRepository:
    """The editor's commit/refetch cycle against real storage."""

    def test_commit_then_refetch_detects_block(self, hour_repository, test_user_id, week):
        writer = UserHourWriter(hour_repository, test_user_id)
        dates = week[2:5]
        editor = BlockEditor(writer.write, Mode.PLAN)
        editor.open(Block(project_id="proj-a", dates=dates, distribution={d: 0.0 for d in dates}, start_index=2))

        editor.quick_entry(7)

        rows = hour_repository.list_range(test_user_id, week[0], week[-1])
        blocks = detect_blocks("proj-a", week, build_hour_map(rows), Mode.PLAN)
        assert len(blocks) == 1
        assert blocks[0].ordered_hours() == [3, 2, 2]

    def test_delete_through_repository(self, hour_repository, test_user_id, week):
        writer = UserHourWriter(hour_repository, test_user_id)
        for day in week[:2]:
            writer.write(_plan("proj-a", day, 4))
        rows = hour_repository.list_range(test_user_id, week[0], week[-1])
        block = detect_blocks("proj-a", week, build_hour_map(rows), Mode.PLAN)[0]

        editor = BlockEditor(writer.write, Mode.PLAN, delete=writer.delete)
        editor.open(block)
        editor.delete()

        rows = hour_repository.list_range(test_user_id, week[0], week[-1])
        assert detect_blocks("proj-a", week, build_hour_map(rows), Mode.PLAN) == []
