"""Print a stored weekly timetable as a table or JSON.

Standalone CLI script for the timetable viewer core. Loads the branch and
division options, loads the stored timetables matching the filter, and
prints the active one as a Monday-Friday grid followed by weekly statistics.

Run with: python scripts/view_timetable.py
Filter:   python scripts/view_timetable.py --branch Computer --division A
Pick:     python scripts/view_timetable.py --branch Computer --record CS_A_2025.json
List:     python scripts/view_timetable.py --list
JSON:     python scripts/view_timetable.py --json

Environment (.env): TIMETABLE_API_URL, LOG_LEVEL, LOG_JSON

Exit codes:
  0 = success (table or JSON on stdout, including "no timetables found")
  1 = error (message on stderr)
"""

import argparse
import asyncio
import json
import os
import sys

from dotenv import load_dotenv

load_dotenv()

# Add project root to path for src imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from src.timetable.client import TimetableApiClient  # noqa: E402
from src.timetable.config import get_config  # noqa: E402
from src.timetable.filters import (  # noqa: E402
    BRANCH_KEY,
    DIVISION_KEY,
    FilterStateController,
    InMemoryQueryStore,
    update_query,
)
from src.timetable.grid import CellState, GridCell, WeeklyGrid  # noqa: E402
from src.timetable.logging import setup_logging  # noqa: E402
from src.timetable.models import RawRecord, WeeklyStatistics  # noqa: E402
from src.timetable.pages.timetable import LoadStatus, TimetableView  # noqa: E402
from src.timetable.slots import ALL_FILTER, TIME_SLOTS, WEEKDAYS  # noqa: E402


def _log(msg: str) -> None:
    """Write diagnostic messages to stderr so stdout stays clean for JSON."""
    print(msg, file=sys.stderr)


def _parse_args() -> argparse.Namespace:
    """Parse CLI arguments using argparse."""
    parser = argparse.ArgumentParser(
        description="Print a stored weekly timetable as a table or JSON.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--branch",
        type=str,
        default=ALL_FILTER,
        help=f"Branch filter (default: {ALL_FILTER}).",
    )
    parser.add_argument(
        "--division",
        type=str,
        default=ALL_FILTER,
        help=f"Division filter (default: {ALL_FILTER}).",
    )
    parser.add_argument(
        "--record",
        type=str,
        default=None,
        help="Filename of the timetable to show (default: first match).",
    )

    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--json",
        action="store_true",
        help="Output the grid and statistics as JSON instead of a table.",
    )
    output_group.add_argument(
        "--list",
        action="store_true",
        help="List matching timetables and the available filter options.",
    )
    return parser.parse_args()


def _format_cell(cell: GridCell) -> str:
    if cell.state is CellState.LUNCH:
        return "LUNCH BREAK"
    if cell.state is CellState.FREE:
        return "-"
    primary = cell.primary
    text = primary.course_name
    if primary.class_batch:
        text += f" [{primary.class_batch}]"
    if cell.overflow_count:
        text += f" +{cell.overflow_count} more"
    return text


def _format_grid(grid: WeeklyGrid) -> str:
    """Format the grid as a human-readable table.

    Columns: Time | Monday | ... | Friday
    """
    headers = ["Time", *(day.value for day in WEEKDAYS)]

    rows = []
    for slot in TIME_SLOTS:
        label = "LUNCH" if slot.is_lunch else slot.value
        rows.append([label, *(_format_cell(cell) for cell in grid.row(slot))])

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
    separator = "-+-".join("-" * w for w in widths)

    row_lines = []
    for row in rows:
        row_lines.append(
            " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row))
        )

    return "\n".join([header_line, separator, *row_lines])


def _format_statistics(stats: WeeklyStatistics) -> str:
    return (
        f"Total Sessions: {stats.total_sessions}  "
        f"Unique Courses: {stats.unique_courses}  "
        f"Faculty Members: {stats.faculty_members}  "
        f"Venues Used: {stats.venues_used}"
    )


def _grid_to_json(grid: WeeklyGrid) -> dict[str, dict[str, dict]]:
    result: dict[str, dict[str, dict]] = {}
    for cell in grid.cells():
        result.setdefault(cell.day.value, {})[cell.slot.value] = {
            "state": cell.state.value,
            "entries": [entry.model_dump(mode="json") for entry in cell.entries],
        }
    return result


def _format_generated(record: RawRecord, fmt: str = "%Y-%m-%d") -> str:
    return record.generated_at.strftime(fmt) if record.generated_at else "unknown"


def _format_sessions(grid: WeeklyGrid) -> str:
    """List every session of cells holding more than one class."""
    lines = []
    for cell in grid.occupied_cells():
        if not cell.overflow_count:
            continue
        lines.append(f"{cell.day.value} {cell.slot.value}:")
        for entry in cell.entries:
            lines.append(
                f"  {entry.course_name} - {entry.faculty or '-'} "
                f"({entry.class_batch or '-'}) [{entry.session_kind}]"
            )
    return "\n".join(lines)


async def main(args: argparse.Namespace) -> int:
    config = get_config()
    setup_logging(json_output=config.log_json, log_level=config.log_level)

    query = update_query("", BRANCH_KEY, args.branch)
    query = update_query(query, DIVISION_KEY, args.division)
    filters = FilterStateController(InMemoryQueryStore(query))

    client = TimetableApiClient.from_config(config)
    view = TimetableView(client, filters)

    _log(f"view_timetable: loading (query={filters.query or '<all>'})")
    try:
        await view.load()
    finally:
        client.close()

    if view.status is LoadStatus.FAILED:
        _log(f"ERROR: {view.notice.message if view.notice else 'Failed to load timetables'}")
        return 1
    if view.notice:
        _log(f"  Warning: {view.notice.message}")

    if args.record and not view.on_select_record(args.record):
        _log(f"ERROR: No timetable named {args.record!r} for this filter")
        return 1

    if args.list:
        state = view.filter_state
        print(
            f"Branches:  {', '.join(view.options.branches) or '-'}"
            f"  (selected: {state.select_value(BRANCH_KEY)})"
        )
        print(
            f"Divisions: {', '.join(view.options.divisions) or '-'}"
            f"  (selected: {state.select_value(DIVISION_KEY)})"
        )
        print(f"{len(view.records)} Timetable(s) Available")
        for record in view.records:
            marker = "*" if view.selector.is_active(record) else " "
            print(
                f" {marker} {record.filename}  {record.title}  Year: {record.year}  "
                f"Generated: {_format_generated(record)}"
            )
        return 0

    if view.is_empty:
        print(f"No Timetables Found. {view.empty_message}")
        return 0

    record = view.active_record
    grid = view.grid
    stats = view.statistics

    if args.json:
        output = {
            "filename": record.filename,
            "title": record.title,
            "year": record.year,
            "generatedAt": record.generated_at.isoformat() if record.generated_at else None,
            "grid": _grid_to_json(grid),
            "statistics": stats.model_dump(),
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        print(
            f"{record.title}  (Year {record.year}, "
            f"generated {_format_generated(record, '%Y-%m-%d %H:%M')})"
        )
        print(_format_grid(grid))
        sessions = _format_sessions(grid)
        if sessions:
            print()
            print("Multiple Sessions:")
            print(sessions)
        print()
        print(_format_statistics(stats))

    _log("view_timetable: done")
    return 0


if __name__ == "__main__":
    args = _parse_args()
    try:
        sys.exit(asyncio.run(main(args)))
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(1)
