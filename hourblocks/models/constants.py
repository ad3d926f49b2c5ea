"""Constants for hourblocks.

This module centralizes all magic numbers and default values used throughout the application.
"""


# Day grid
DAYS_PER_WEEK = 7
WEEK_STARTS_ON = 0  # Python weekday(): Monday=0

# Block detection: a single non-zero day is a plain cell, not a block
MIN_BLOCK_DAYS = 2

# Time booking summary
STANDARD_WEEK_HOURS = 40
SUMMARY_PRECISION = 1  # Round summary hours to one decimal place

# Storage defaults
DEFAULT_PLANNED_HOURS = 0.0
