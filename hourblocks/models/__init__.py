"""Data models for hourblocks."""

from hourblocks.models.hour_entry import HourEntry, HourPair, HourWrite, HourField, Mode, field_for_mode, cleared_value
from hourblocks.models.block import Block

__all__ = [
    "HourEntry",
    "HourPair",
    "HourWrite",
    "HourField",
    "Mode",
    "field_for_mode",
    "cleared_value",
    "Block",
]
