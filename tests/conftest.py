"""Shared fixtures: sample stored timetables and an in-memory timetable source."""

import asyncio
import typing as t
from datetime import datetime, timezone

import pytest

from src.timetable.models import FilterOptions, RawRecord

SAMPLE_ROWS = [
    ["**Monday**", "9:00-10:00", "B1", "Data Structures", "Dr. Rao", "Room 101"],
    ["**Monday**", "10:00-11:00", "B1", "DBMS", "Prof. Iyer", "Room 102"],
    ["**Monday**", "10:00-11:00", "B2", "DBMS LAB", "Prof. Shah", "Lab 3"],
    ["ALL", "1:00-2:00", "", "LUNCH", "", ""],
    ["**Tuesday**", "2:00-3:00", "", "Operating Systems", "Dr. Rao", "Room 101"],
    ["**Wednesday**", "", "", "", "", ""],
]


def make_record(
    filename: str,
    rows: list[list[t.Any]] | None = None,
    branch: str = "Computer",
    division: str = "A",
) -> RawRecord:
    return RawRecord(
        filename=filename,
        branch=branch,
        division=division,
        year="SE",
        generatedAt=datetime(2025, 7, 1, 10, 30, tzinfo=timezone.utc),
        timetable={
            "headers": ["Day", "Time", "Class/Batch", "Course", "Faculty", "Venue"],
            "rows": rows if rows is not None else SAMPLE_ROWS,
        },
    )


class FakeSource:
    """In-memory TimetableSource.

    records maps (branch, division) to a result list or an exception to raise.
    A gate registered for a key holds that fetch until the event is set.
    """

    def __init__(
        self,
        records: dict[tuple[str | None, str | None], t.Any] | None = None,
        options: FilterOptions | Exception | None = None,
    ) -> None:
        self.records = records or {}
        self.options = options if options is not None else FilterOptions(
            branches=["Computer", "IT"], divisions=["A", "B"]
        )
        self.gates: dict[tuple[str | None, str | None], asyncio.Event] = {}
        self.calls: list[tuple[str | None, str | None]] = []
        self.option_calls = 0

    async def fetch_filter_options(self) -> FilterOptions:
        self.option_calls += 1
        if isinstance(self.options, Exception):
            raise self.options
        return self.options

    async def fetch_records(
        self, branch: str | None, division: str | None
    ) -> list[RawRecord]:
        key = (branch, division)
        self.calls.append(key)
        gate = self.gates.get(key)
        if gate is not None:
            await gate.wait()
        result = self.records.get(key, [])
        if isinstance(result, Exception):
            raise result
        return list(result)


@pytest.fixture
def sample_record() -> RawRecord:
    return make_record("computer_A_SE.json")


@pytest.fixture
def source() -> FakeSource:
    return FakeSource()
