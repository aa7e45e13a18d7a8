"""Row parsing and filtering for stored timetables.

Stored rows are positional string lists written by the timetable generator:

    ["**Monday**", "9:00-10:00", "B1", "Data Structures", "Dr. Rao", "Room 101"]
      day           time          batch  course             faculty    venue

Rows may be short, contain None, or carry placeholder rows for breaks
(["ALL", "1:00-2:00", "", "LUNCH", "", ""]). Parsing never fails; filtering
drops everything that is not a displayable class.
"""

from collections.abc import Iterable, Sequence
from typing import Any

from src.timetable.logging import get_logger
from src.timetable.models import RawRecord, ScheduleEntry
from src.timetable.slots import (
    ALL_DAYS_SENTINEL,
    DAY_MARKUP,
    LUNCH_MARKER,
    LUNCH_TIME_LABELS,
    WEEKDAY_LABELS,
)

log = get_logger(__name__)

# Column positions fixed by the generator's export format
DAY_COL = 0
TIME_COL = 1
BATCH_COL = 2
COURSE_COL = 3
FACULTY_COL = 4
VENUE_COL = 5


def _cell(row: Sequence[Any], index: int) -> str:
    """Cell text at index, "" when the row is too short or the cell is empty."""
    if index >= len(row):
        return ""
    value = row[index]
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def clean_day(value: str) -> str:
    """Strip emphasis markup from a day cell: "**Monday** " -> "Monday"."""
    return value.replace(DAY_MARKUP, "").strip()


def parse_row(row: Sequence[Any] | None) -> ScheduleEntry:
    """Convert one raw row into a ScheduleEntry.

    Total: missing cells become "", extra cells are ignored.
    """
    if row is None:
        row = ()
    return ScheduleEntry(
        day=clean_day(_cell(row, DAY_COL)),
        time=_cell(row, TIME_COL),
        class_batch=_cell(row, BATCH_COL),
        course_name=_cell(row, COURSE_COL),
        faculty=_cell(row, FACULTY_COL),
        venue=_cell(row, VENUE_COL),
    )


def parse_rows(rows: Iterable[Sequence[Any] | None]) -> list[ScheduleEntry]:
    return [parse_row(row) for row in rows]


def is_displayable(entry: ScheduleEntry) -> bool:
    """True if the entry is a class session that belongs in the weekly grid."""
    course = entry.course_name.strip()
    if not course or course == LUNCH_MARKER:
        return False
    if not entry.day or entry.day == ALL_DAYS_SENTINEL:
        return False
    if entry.day not in WEEKDAY_LABELS:
        return False
    if entry.time in LUNCH_TIME_LABELS:
        return False
    return True


def filter_entries(entries: Iterable[ScheduleEntry]) -> list[ScheduleEntry]:
    """Keep displayable entries, in their original order."""
    return [entry for entry in entries if is_displayable(entry)]


def parse_record(record: RawRecord | None) -> list[ScheduleEntry]:
    """Parse and filter every row of a stored timetable.

    Returns an empty list when there is no active record or it has no rows.
    """
    if record is None:
        return []

    rows = record.timetable.rows
    entries = filter_entries(parse_rows(rows))
    log.debug(
        "record_parsed",
        filename=record.filename,
        rows=len(rows),
        entries=len(entries),
        dropped=len(rows) - len(entries),
    )
    return entries
