"""Weekly timetable viewer core.

Turns stored, pre-generated timetables (header row + positional string rows)
into a weekly day x time-slot grid, and tracks which timetable is shown for
the current branch/division filter.
"""

from src.timetable.grid import CellState, GridCell, WeeklyGrid, build_grid
from src.timetable.models import RawRecord, ScheduleEntry
from src.timetable.pages.timetable import TimetableView
from src.timetable.parser import filter_entries, parse_record, parse_row

__all__ = [
    "TimetableView",
    "RawRecord",
    "ScheduleEntry",
    "WeeklyGrid",
    "GridCell",
    "CellState",
    "build_grid",
    "parse_row",
    "filter_entries",
    "parse_record",
]
