"""Branch/division filter state backed by a URL query string.

The query string is the only place the selection lives, so shared links and
back/forward navigation reproduce the same view. The controller reads the
state back from its QueryStore on every access and writes changes through
it; it keeps no copy of its own.

    ?branch=Computer&division=A    -> FilterState(branch="Computer", division="A")
    ?division=A                    -> FilterState(branch=None, division="A")
    (empty)                        -> FilterState()  # all branches, all divisions
"""

from typing import Protocol
from urllib.parse import parse_qsl, urlencode

from pydantic import BaseModel, ConfigDict

from src.timetable.logging import get_logger
from src.timetable.slots import ALL_FILTER

log = get_logger(__name__)

BRANCH_KEY = "branch"
DIVISION_KEY = "division"


class FilterState(BaseModel):
    """Snapshot of both filter dimensions; None means "all"."""

    model_config = ConfigDict(frozen=True)

    branch: str | None = None
    division: str | None = None

    @property
    def is_filtered(self) -> bool:
        return self.branch is not None or self.division is not None

    def select_value(self, key: str) -> str:
        """Value for a choice control, with "all" for an unset dimension."""
        value = getattr(self, key)
        return ALL_FILTER if value is None else value


def _normalize(value: str | None) -> str | None:
    """Map the "all" sentinel and blank values to None."""
    if value is None:
        return None
    value = value.strip()
    if not value or value == ALL_FILTER:
        return None
    return value


def parse_query(query: str) -> FilterState:
    params = dict(parse_qsl(query.lstrip("?")))
    return FilterState(
        branch=_normalize(params.get(BRANCH_KEY)),
        division=_normalize(params.get(DIVISION_KEY)),
    )


def update_query(query: str, key: str, value: str | None) -> str:
    """Return query with key set to value, or removed for "all".

    Unrelated parameters keep their order.
    """
    params = [(k, v) for k, v in parse_qsl(query.lstrip("?")) if k != key]
    value = _normalize(value)
    if value is not None:
        params.append((key, value))
    return urlencode(params)


class QueryStore(Protocol):
    """External persistence for the query string (browser URL, CLI args...)."""

    def get(self) -> str: ...

    def set(self, query: str) -> None: ...


class InMemoryQueryStore:
    def __init__(self, query: str = "") -> None:
        self._query = query.lstrip("?")

    def get(self) -> str:
        return self._query

    def set(self, query: str) -> None:
        self._query = query


class FilterStateController:
    """Reads and writes the branch/division selection through a QueryStore."""

    def __init__(self, store: QueryStore | None = None) -> None:
        self.store = store if store is not None else InMemoryQueryStore()

    @property
    def state(self) -> FilterState:
        return parse_query(self.store.get())

    @property
    def query(self) -> str:
        return self.store.get()

    def set_branch(self, value: str | None) -> bool:
        """Set the branch filter ("all" clears it).

        Returns:
            True if the selection changed and records must be reloaded.
        """
        return self._set(BRANCH_KEY, value)

    def set_division(self, value: str | None) -> bool:
        """Set the division filter ("all" clears it).

        Returns:
            True if the selection changed and records must be reloaded.
        """
        return self._set(DIVISION_KEY, value)

    def _set(self, key: str, value: str | None) -> bool:
        before = self.state
        self.store.set(update_query(self.store.get(), key, value))
        after = self.state

        changed = after != before
        log.info(
            "filter_changed" if changed else "filter_unchanged",
            key=key,
            value=getattr(after, key),
        )
        return changed
