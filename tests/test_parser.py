"""Tests for row parsing and entry filtering."""

import pytest

from src.timetable.models import ScheduleEntry
from src.timetable.parser import (
    clean_day,
    filter_entries,
    is_displayable,
    parse_record,
    parse_row,
    parse_rows,
)

from conftest import make_record


def test_parse_row_strips_day_markup() -> None:
    """The documented Monday row parses field by field."""
    entry = parse_row(
        ["**Monday**", "9:00-10:00", "B1", "Data Structures", "Dr. Rao", "Room 101"]
    )

    assert entry == ScheduleEntry(
        day="Monday",
        time="9:00-10:00",
        class_batch="B1",
        course_name="Data Structures",
        faculty="Dr. Rao",
        venue="Room 101",
    )


@pytest.mark.parametrize(
    "row",
    [
        [],
        None,
        ["Monday"],
        ["Monday", "9:00-10:00", None, None],
        [None, None, None, None, None, None],
        ["Monday", "9:00-10:00", "B1", "DS", "Dr. Rao", "Room 101", "extra", "cells"],
        [1, 2.5, True, None, "x", 0],
    ],
)
def test_parse_row_is_total(row) -> None:
    """Short, None, oversized and non-string rows all produce an entry."""
    entry = parse_row(row)

    assert isinstance(entry, ScheduleEntry)
    for value in entry.model_dump().values():
        assert isinstance(value, str)


def test_parse_row_missing_cells_are_empty() -> None:
    entry = parse_row(["Tuesday", "2:00-3:00"])

    assert entry.day == "Tuesday"
    assert entry.time == "2:00-3:00"
    assert entry.class_batch == ""
    assert entry.course_name == ""
    assert entry.faculty == ""
    assert entry.venue == ""


def test_parse_row_converts_non_string_cells() -> None:
    entry = parse_row(["Friday", "4:00-5:00", 7, "Maths", None, 101])

    assert entry.class_batch == "7"
    assert entry.faculty == ""
    assert entry.venue == "101"


def test_time_label_is_kept_verbatim() -> None:
    entry = parse_row(["Monday", " 9:00-10:00 ", "", "DS", "", ""])

    assert entry.time == " 9:00-10:00 "


def test_clean_day_removes_every_marker() -> None:
    assert clean_day("  **Mon**day** ") == "Monday"
    assert clean_day("****") == ""


@pytest.mark.parametrize(
    "row",
    [
        ["ALL", "1:00-2:00", "", "LUNCH", "", ""],
        ["**Monday**", "9:00-10:00", "B1", "", "Dr. Rao", "Room 101"],
        ["**Monday**", "9:00-10:00", "B1", "   ", "Dr. Rao", "Room 101"],
        ["**Monday**", "9:00-10:00", "B1", "LUNCH", "", ""],
        ["", "9:00-10:00", "B1", "Data Structures", "", ""],
        ["****", "9:00-10:00", "B1", "Data Structures", "", ""],
        ["ALL", "9:00-10:00", "B1", "Data Structures", "", ""],
        ["Saturday", "9:00-10:00", "B1", "Data Structures", "", ""],
        ["Monday", "12:00-1:00", "B1", "Data Structures", "", ""],
        ["Monday", "1:00-2:00", "B1", "Data Structures", "", ""],
    ],
)
def test_non_class_rows_are_dropped(row) -> None:
    assert not is_displayable(parse_row(row))
    assert filter_entries([parse_row(row)]) == []


def test_filter_preserves_order_and_duplicates() -> None:
    """Only the listed exclusions are removed; nothing is reordered or deduplicated."""
    rows = [
        ["Tuesday", "2:00-3:00", "", "OS", "", ""],
        ["ALL", "1:00-2:00", "", "LUNCH", "", ""],
        ["Monday", "9:00-10:00", "B1", "DS", "", ""],
        ["Monday", "9:00-10:00", "B1", "DS", "", ""],
    ]

    entries = filter_entries(parse_rows(rows))

    assert [(e.day, e.course_name) for e in entries] == [
        ("Tuesday", "OS"),
        ("Monday", "DS"),
        ("Monday", "DS"),
    ]


def test_filtered_entries_never_contain_excluded_values(sample_record) -> None:
    entries = parse_record(sample_record)

    assert entries
    for entry in entries:
        assert entry.course_name.strip() not in ("", "LUNCH")
        assert entry.day not in ("", "ALL")
        assert entry.time not in ("12:00-1:00", "1:00-2:00")


def test_parse_record_without_record_or_rows() -> None:
    assert parse_record(None) == []
    assert parse_record(make_record("empty.json", rows=[])) == []


def test_parse_record_keeps_classes_only(sample_record) -> None:
    entries = parse_record(sample_record)

    assert [e.course_name for e in entries] == [
        "Data Structures",
        "DBMS",
        "DBMS LAB",
        "Operating Systems",
    ]


def test_session_kind() -> None:
    assert parse_row(["Monday", "9:00-10:00", "B1", "DBMS LAB"]).session_kind == "Lab"
    assert parse_row(["Monday", "9:00-10:00", "B1", "DBMS"]).session_kind == "Theory"
