"""Weekly grid assembly from filtered schedule entries.

Entries are grouped by exact (day, time) labels. Each canonical cell of the
WEEKDAYS x TIME_SLOTS cross-product resolves to one of three states:

    occupied  first entry is the primary, the rest are overflow
    lunch     always for the lunch slot, whatever the data says
    free      no entry for that day and time
"""

from collections.abc import Iterable, Iterator
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from src.timetable.logging import get_logger
from src.timetable.models import ScheduleEntry, WeeklyStatistics
from src.timetable.slots import TIME_SLOTS, WEEKDAYS, TimeSlot, Weekday

log = get_logger(__name__)


class CellState(str, Enum):
    OCCUPIED = "occupied"
    LUNCH = "lunch"
    FREE = "free"


class GridCell(BaseModel):
    """One day x slot cell of the weekly grid."""

    model_config = ConfigDict(frozen=True)

    day: Weekday
    slot: TimeSlot
    state: CellState
    entries: tuple[ScheduleEntry, ...] = ()

    @property
    def primary(self) -> ScheduleEntry | None:
        """Entry shown in the cell itself; None for lunch and free cells."""
        return self.entries[0] if self.entries else None

    @property
    def overflow(self) -> tuple[ScheduleEntry, ...]:
        """Concurrent sessions behind the primary, shown as "+N more"."""
        return self.entries[1:]

    @property
    def overflow_count(self) -> int:
        return len(self.overflow)


class WeeklyGrid(BaseModel):
    """Entries indexed by day label, then time label, in source row order.

    Every (day, time) key present holds at least one entry. Keys outside the
    canonical weekdays and slots are kept but never rendered as cells.
    """

    model_config = ConfigDict(frozen=True)

    groups: dict[str, dict[str, tuple[ScheduleEntry, ...]]] = Field(
        default_factory=dict
    )

    def entries_at(self, day: str, time: str) -> tuple[ScheduleEntry, ...]:
        return self.groups.get(day, {}).get(time, ())

    def cell(self, day: Weekday | str, slot: TimeSlot | str) -> GridCell:
        day = Weekday(day)
        slot = TimeSlot(slot)
        if slot.is_lunch:
            return GridCell(day=day, slot=slot, state=CellState.LUNCH)

        entries = self.entries_at(day.value, slot.value)
        if not entries:
            return GridCell(day=day, slot=slot, state=CellState.FREE)
        return GridCell(day=day, slot=slot, state=CellState.OCCUPIED, entries=entries)

    def row(self, slot: TimeSlot | str) -> list[GridCell]:
        """Cells of one time slot across the week, Monday first."""
        return [self.cell(day, slot) for day in WEEKDAYS]

    def cells(self) -> Iterator[GridCell]:
        """Every canonical cell, slot by slot, Monday to Friday."""
        for slot in TIME_SLOTS:
            yield from self.row(slot)

    def occupied_cells(self) -> list[GridCell]:
        return [cell for cell in self.cells() if cell.state is CellState.OCCUPIED]


def build_grid(entries: Iterable[ScheduleEntry]) -> WeeklyGrid:
    """Index filtered entries into a WeeklyGrid.

    Entries at the lunch slot are not indexed even if the filter let them
    through; the lunch cell is forced regardless.
    """
    groups: dict[str, dict[str, list[ScheduleEntry]]] = {}
    skipped_lunch = 0

    for entry in entries:
        if entry.time == TimeSlot.LUNCH.value:
            skipped_lunch += 1
            continue
        groups.setdefault(entry.day, {}).setdefault(entry.time, []).append(entry)

    if skipped_lunch:
        log.debug("lunch_slot_entries_skipped", count=skipped_lunch)

    return WeeklyGrid(
        groups={
            day: {time: tuple(group) for time, group in by_time.items()}
            for day, by_time in groups.items()
        }
    )


def build_statistics(entries: Iterable[ScheduleEntry]) -> WeeklyStatistics:
    """Session, course, faculty and venue counts over filtered entries."""
    entries = list(entries)
    return WeeklyStatistics(
        total_sessions=sum(1 for e in entries if e.course_name),
        unique_courses=len({e.course_name for e in entries if e.course_name}),
        faculty_members=len({e.faculty for e in entries if e.faculty}),
        venues_used=len({e.venue for e in entries if e.venue}),
    )
