"""TimetableView - the timetable viewer page, minus the rendering.

Loads the branch/division options once, loads the stored timetables that
match the current filter, and projects the active one into a WeeklyGrid.

Flow:
  load()                       options fetch, then reload()
  on_branch_change("CS")       query string updated -> reload()
  on_division_change("all")    query key removed -> reload()
  on_select_record(filename)   switch the active timetable (until next reload)
  on_refresh()                 reload() with the same filter

Every record fetch is tagged with the filter snapshot that started it and a
sequence number. A response (or failure) is applied only if the filter still
matches its snapshot and no newer response for that filter was applied first,
so a slow response for an old filter never replaces a fresher view.
"""

from enum import Enum

from pydantic import BaseModel

from src.timetable.client import TimetableSource
from src.timetable.errors import FetchError
from src.timetable.filters import FilterState, FilterStateController
from src.timetable.grid import WeeklyGrid, build_grid, build_statistics
from src.timetable.logging import get_logger
from src.timetable.models import FilterOptions, RawRecord, ScheduleEntry, WeeklyStatistics
from src.timetable.parser import parse_record
from src.timetable.selector import TimetableSelector

log = get_logger(__name__)


class LoadStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class Notice(BaseModel):
    """User-visible failure message (shown as a toast by the UI)."""

    title: str = "Error"
    message: str


class TimetableView:
    """Page controller for browsing stored timetables by branch and division."""

    def __init__(
        self,
        source: TimetableSource,
        filters: FilterStateController | None = None,
    ) -> None:
        self.source = source
        self.filters = filters if filters is not None else FilterStateController()
        self.selector = TimetableSelector()
        self.options = FilterOptions()
        self.status = LoadStatus.IDLE
        self.notice: Notice | None = None

        self._request_seq = 0
        self._applied_seq = 0

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Initial load: filter options, then the timetables for the current filter."""
        self.status = LoadStatus.LOADING
        try:
            self.options = await self.source.fetch_filter_options()
        except FetchError as e:
            # Records can still be loaded; the choice controls just stay empty
            log.error("filter_options_failed", error=str(e), type=type(e).__name__)
            self.notice = Notice(message=str(e) or "Failed to load data")

        await self.reload()

    async def reload(self) -> bool:
        """Fetch the timetables for the current filter and activate the first.

        Returns:
            True if the response was applied, False if it failed or was stale.
        """
        snapshot = self.filters.state
        self._request_seq += 1
        seq = self._request_seq
        self.status = LoadStatus.LOADING

        log.info(
            "records_loading",
            branch=snapshot.branch,
            division=snapshot.division,
            request=seq,
        )

        try:
            records = await self.source.fetch_records(snapshot.branch, snapshot.division)
        except FetchError as e:
            if self._is_stale(snapshot, seq):
                log.debug("stale_failure_discarded", request=seq, error=str(e))
                return False
            self._applied_seq = seq
            self.status = LoadStatus.FAILED
            self.notice = Notice(message=str(e) or "Failed to load timetables")
            log.error(
                "records_failed",
                branch=snapshot.branch,
                division=snapshot.division,
                error=str(e),
                type=type(e).__name__,
                kept=len(self.selector.records),
            )
            return False

        if self._is_stale(snapshot, seq):
            log.debug(
                "stale_response_discarded",
                request=seq,
                branch=snapshot.branch,
                division=snapshot.division,
            )
            return False

        self._applied_seq = seq
        self.selector.replace(records)
        self.status = LoadStatus.LOADED
        log.info(
            "records_loaded",
            branch=snapshot.branch,
            division=snapshot.division,
            count=len(records),
            active=self.selector.active.filename if self.selector.active else None,
        )
        return True

    def _is_stale(self, snapshot: FilterState, seq: int) -> bool:
        return snapshot != self.filters.state or seq < self._applied_seq

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    async def on_branch_change(self, value: str) -> None:
        if self.filters.set_branch(value):
            await self.reload()

    async def on_division_change(self, value: str) -> None:
        if self.filters.set_division(value):
            await self.reload()

    def on_select_record(self, filename: str) -> bool:
        return self.selector.select(filename)

    async def on_refresh(self) -> bool:
        return await self.reload()

    def dismiss_notice(self) -> None:
        self.notice = None

    # ------------------------------------------------------------------
    # Presentation state
    # ------------------------------------------------------------------

    @property
    def filter_state(self) -> FilterState:
        return self.filters.state

    @property
    def records(self) -> list[RawRecord]:
        return self.selector.records

    @property
    def active_record(self) -> RawRecord | None:
        return self.selector.active

    @property
    def is_loading(self) -> bool:
        return self.status is LoadStatus.LOADING

    @property
    def is_empty(self) -> bool:
        """No timetables for this filter. A valid state, not a failure."""
        return self.status is LoadStatus.LOADED and not self.selector.records

    @property
    def empty_message(self) -> str:
        if self.filter_state.is_filtered:
            return "No timetables have been generated for the selected filters yet."
        return (
            "No timetables have been generated yet. "
            "Upload data and generate timetables first."
        )

    @property
    def entries(self) -> list[ScheduleEntry]:
        return parse_record(self.selector.active)

    @property
    def grid(self) -> WeeklyGrid | None:
        """Grid of the active timetable, None when no timetable is active."""
        if self.selector.active is None:
            return None
        return build_grid(self.entries)

    @property
    def statistics(self) -> WeeklyStatistics:
        return build_statistics(self.entries)
