"""Tests for data model validation."""

import pytest
from pydantic import ValidationError

from hourblocks.models.block import Block
from hourblocks.models.hour_entry import HourField, HourPair, Mode, cleared_value, field_for_mode


class TestBlock:

    def test_valid_block(self, week):
        block = Block(project_id="proj-a", dates=week[2:4], distribution={week[2]: 1, week[3]: 2}, start_index=2)

        assert block.total == 3
        assert block.end_index == 3
        assert block.ordered_hours() == [1, 2]

    def test_single_day_is_not_a_block(self, week):
        with pytest.raises(ValidationError):
            Block(project_id="proj-a", dates=[week[0]], distribution={week[0]: 1})

    def test_dates_must_be_consecutive(self, week):
        with pytest.raises(ValidationError):
            Block(project_id="proj-a", dates=[week[0], week[2]], distribution={week[0]: 1, week[2]: 1})

    def test_distribution_must_match_dates(self, week):
        with pytest.raises(ValidationError):
            Block(project_id="proj-a", dates=week[0:2], distribution={week[0]: 1})


class TestModeHelpers:

    def test_field_for_mode(self):
        assert field_for_mode(Mode.PLAN) == HourField.PLANNED_HOURS
        assert field_for_mode("record") == HourField.RECORDED_HOURS

    def test_cleared_value(self):
        assert cleared_value(Mode.PLAN) == 0.0
        assert cleared_value(Mode.RECORD) is None

    def test_pair_value_by_mode(self):
        pair = HourPair(planned=3, recorded=None)
        assert pair.value(Mode.PLAN) == 3
        assert pair.value(Mode.RECORD) == 0
