"""Active timetable selection among the records returned for a filter."""

from collections.abc import Sequence

from src.timetable.logging import get_logger
from src.timetable.models import RawRecord

log = get_logger(__name__)


class TimetableSelector:
    """Holds the candidate records and the one currently shown.

    Every reload makes the first record active again; an explicit selection
    only lasts until the next reload. Records are identified by filename.
    """

    def __init__(self) -> None:
        self.records: list[RawRecord] = []
        self.active: RawRecord | None = None

    def replace(self, records: Sequence[RawRecord]) -> RawRecord | None:
        """Swap in a freshly loaded result set and activate its first record."""
        self.records = list(records)
        self.active = self.records[0] if self.records else None
        log.debug(
            "records_replaced",
            count=len(self.records),
            active=self.active.filename if self.active else None,
        )
        return self.active

    def find(self, filename: str) -> RawRecord | None:
        # Duplicate filenames: first match wins
        return next((r for r in self.records if r.filename == filename), None)

    def select(self, filename: str) -> bool:
        """Make the record with this filename active.

        Returns:
            False if no candidate has that filename (selection unchanged).
        """
        record = self.find(filename)
        if record is None:
            log.warning("record_not_found", filename=filename, candidates=len(self.records))
            return False
        self.active = record
        log.info("record_selected", filename=filename)
        return True

    def is_active(self, record: RawRecord) -> bool:
        return self.active is not None and self.active.filename == record.filename
