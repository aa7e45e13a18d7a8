"""Canonical weekdays, time slots and row markers of a generated timetable.

The grid is always the cross-product WEEKDAYS x TIME_SLOTS, in enum order.
Time slot labels are opaque: rows are matched against them by exact string
equality, never parsed as clock times.
"""

from enum import Enum


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"


class TimeSlot(str, Enum):
    """Teaching day 9:00 AM - 5:00 PM in one-hour slots, lunch at noon."""

    NINE = "9:00-10:00"
    TEN = "10:00-11:00"
    ELEVEN = "11:00-12:00"
    LUNCH = "12:00-1:00"
    TWO = "2:00-3:00"
    THREE = "3:00-4:00"
    FOUR = "4:00-5:00"

    @property
    def is_lunch(self) -> bool:
        return self is TimeSlot.LUNCH


WEEKDAYS: tuple[Weekday, ...] = tuple(Weekday)
TIME_SLOTS: tuple[TimeSlot, ...] = tuple(TimeSlot)

WEEKDAY_LABELS: frozenset[str] = frozenset(day.value for day in Weekday)

# Generators emphasise day names as "**Monday**"
DAY_MARKUP = "**"

# Placeholder rows the generator writes for breaks
LUNCH_MARKER = "LUNCH"
ALL_DAYS_SENTINEL = "ALL"

# Rows at these times are never classes. "1:00-2:00" is the label generated
# data uses on its LUNCH/ALL placeholder rows.
LUNCH_TIME_LABELS: frozenset[str] = frozenset({TimeSlot.LUNCH.value, "1:00-2:00"})

# Filter sentinel meaning "no constraint on this dimension"
ALL_FILTER = "all"
