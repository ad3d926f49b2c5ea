"""Hour value parsing and single-cell entry."""

import logging
import math
from datetime import date
from typing import Callable, Optional, Union

from hourblocks.models.hour_entry import HourPair, HourWrite, Mode, cleared_value, field_for_mode

logger = logging.getLogger(__name__)


class InvalidHourValue(ValueError):
    """Raised for hour input that is non-numeric, non-finite or negative."""


def parse_hours(value: Union[str, int, float, None], *, clamp: bool = False) -> float:
    """Parse user input into an hour value.

    Blank input means 0. Negative values raise InvalidHourValue unless
    ``clamp`` is set, in which case they become 0.
    """
    if value is None:
        return 0.0
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return 0.0
    if isinstance(value, bool):
        raise InvalidHourValue(f"not a number: {value!r}")
    try:
        hours = float(value)
    except (TypeError, ValueError):
        raise InvalidHourValue(f"not a number: {value!r}") from None
    if not math.isfinite(hours):
        raise InvalidHourValue(f"not a finite number: {value!r}")
    if hours < 0:
        if clamp:
            return 0.0
        raise InvalidHourValue(f"hours cannot be negative: {value!r}")
    return hours


def commit_cell(
    write: Callable[[HourWrite], None],
    project_id: str,
    day: date,
    mode: Mode,
    text: Union[str, float, None],
) -> Optional[HourWrite]:
    """Write a single plain cell.

    Invalid input is rejected before any write is attempted. Blank input
    clears the cell (0 in plan mode, null in record mode).

    Returns:
        The issued write request, or None if the input was rejected
    """
    hours: Optional[float]
    if text is None or (isinstance(text, str) and not text.strip()):
        hours = cleared_value(mode)
    else:
        try:
            hours = parse_hours(text)
        except InvalidHourValue as e:
            logger.debug(f"Rejected cell input for {project_id} {day}: {str(e)}")
            return None

    request = HourWrite(project_id=project_id, date=day, field=field_for_mode(mode), value=hours)
    write(request)
    return request


def recorded_diff(pair: HourPair) -> Optional[float]:
    """Recorded minus planned hours, when there is a plan to compare against."""
    if pair.planned <= 0:
        return None
    return (pair.recorded or 0.0) - pair.planned
