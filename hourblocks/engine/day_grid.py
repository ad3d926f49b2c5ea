"""Day grid for hourblocks.

Pure calendar arithmetic for the weekly and monthly schedule views.
Weeks are Monday-anchored and all arithmetic is on calendar dates
(no time-of-day, no timezone).
"""

from datetime import date, timedelta
from typing import Iterable, List, Tuple, Union

from hourblocks.models.constants import DAYS_PER_WEEK, WEEK_STARTS_ON


def parse_day(value: Union[str, date]) -> date:
    """Parse an ISO ``YYYY-MM-DD`` string (dates pass through unchanged)."""
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def to_iso(day: date) -> str:
    return day.isoformat()


def start_of_week(day: date) -> date:
    """Return the Monday of the week containing ``day``."""
    offset = (day.weekday() - WEEK_STARTS_ON) % DAYS_PER_WEEK
    return day - timedelta(days=offset)


def week_days(week_start: date) -> List[date]:
    """Return the 7 days ``[week_start, week_start + 6]`` in order."""
    return [week_start + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def week_key(week_start: date) -> str:
    """Identifier for a displayed week row (the ISO date of its Monday)."""
    return to_iso(start_of_week(week_start))


def week_range(week_start: date) -> Tuple[str, str]:
    """Inclusive ``(start, end)`` ISO strings used to fetch a week's rows."""
    days = week_days(week_start)
    return to_iso(days[0]), to_iso(days[-1])


def days_between(start: date, end: date) -> Iterable[date]:
    """Yield every day from ``start`` to ``end`` inclusive."""
    cur = start
    while cur <= end:
        yield cur
        cur = cur + timedelta(days=1)


def month_weeks(month: date) -> List[date]:
    """Return the Monday week-starts of every week intersecting ``month``.

    The first week may begin in the previous month and the last week may
    end in the next one.
    """
    first = month.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    last = next_first - timedelta(days=1)

    weeks: List[date] = []
    cur = start_of_week(first)
    while cur <= last:
        weeks.append(cur)
        cur = cur + timedelta(days=DAYS_PER_WEEK)
    return weeks


def month_range(month: date) -> Tuple[str, str]:
    """Inclusive fetch range covering every displayed week of ``month``."""
    weeks = month_weeks(month)
    return to_iso(weeks[0]), to_iso(weeks[-1] + timedelta(days=DAYS_PER_WEEK - 1))
