"""Pydantic models for timetable data.

All data structures use Pydantic v2 for validation, serialization, and type safety.
Wire payloads from the storage service use camelCase (``generatedAt``); models
accept both the alias and the field name.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class TimetableTable(BaseModel):
    """Header row plus loosely-typed data rows of one stored timetable."""

    model_config = ConfigDict(frozen=True)

    headers: list[Any] = Field(default_factory=list)
    # Rows and cells stay untyped here; the row parser normalises them
    rows: list[list[Any] | None] = Field(default_factory=list)


class RawRecord(BaseModel):
    """One stored, pre-generated timetable as returned by the storage service."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
    )

    filename: str
    branch: str = ""
    division: str = ""
    year: str = ""
    generated_at: datetime | None = Field(default=None, alias="generatedAt")
    timetable: TimetableTable = Field(default_factory=TimetableTable)

    @property
    def title(self) -> str:
        """Card title, e.g. "Computer - Division A"."""
        return f"{self.branch} - Division {self.division}"


class ScheduleEntry(BaseModel):
    """One class session derived from a raw timetable row.

    Has no identity of its own: entries are rebuilt from the active record
    on every parse pass.
    """

    model_config = ConfigDict(frozen=True)

    day: str = ""  # "Monday", markup already stripped
    time: str = ""  # "9:00-10:00", matched against TimeSlot labels
    class_batch: str = ""  # "B1"
    course_name: str = ""  # "Data Structures", "DBMS LAB"
    faculty: str = ""
    venue: str = ""

    @property
    def session_kind(self) -> str:
        return "Lab" if "LAB" in self.course_name else "Theory"


class FilterOptions(BaseModel):
    """Every branch and division the storage service knows about."""

    branches: list[str] = Field(default_factory=list)
    divisions: list[str] = Field(default_factory=list)


class WeeklyStatistics(BaseModel):
    """Counts shown under the grid for the active timetable."""

    total_sessions: int = 0
    unique_courses: int = 0
    faculty_members: int = 0
    venues_used: int = 0
