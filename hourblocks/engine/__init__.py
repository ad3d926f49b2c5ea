"""Weekly hour-block engine for hourblocks."""

from hourblocks.engine.day_grid import week_days, week_key, month_weeks, start_of_week
from hourblocks.engine.hour_map import HourMap, build_hour_map, build_team_hour_map
from hourblocks.engine.block_detector import detect_blocks, detect_all
from hourblocks.engine.distributor import distribute, distribute_over
from hourblocks.engine.drag_tracker import DragTracker, DragState, PendingBlock, GestureState
from hourblocks.engine.block_editor import BlockEditor, CommitResult
from hourblocks.engine.cell import InvalidHourValue, parse_hours, commit_cell, recorded_diff
from hourblocks.engine.summary import summarize, TimeSummary, SummaryRow

__all__ = [
    "week_days",
    "week_key",
    "month_weeks",
    "start_of_week",
    "HourMap",
    "build_hour_map",
    "build_team_hour_map",
    "detect_blocks",
    "detect_all",
    "distribute",
    "distribute_over",
    "DragTracker",
    "DragState",
    "PendingBlock",
    "GestureState",
    "BlockEditor",
    "CommitResult",
    "InvalidHourValue",
    "parse_hours",
    "commit_cell",
    "recorded_diff",
    "summarize",
    "TimeSummary",
    "SummaryRow",
]
