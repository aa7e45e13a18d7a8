"""HTTP client for the timetable storage service.

The storage service wraps every response in a success envelope:

    GET /timetables/options
        {"success": true, "data": {"branches": ["Computer", ...], "divisions": ["A", ...]}}
    GET /timetables?branch=Computer&division=A
        {"success": true, "data": [{"filename": ..., "generatedAt": ..., "timetable": {...}}]}
    any endpoint on failure
        {"success": false, "error": "message"}

Requests go through requests.Session with tenacity retries on transient
failures. The async fetch_* methods run the blocking calls in a worker thread
so the page controller's event loop is never blocked.
"""

import asyncio
from typing import Any, Protocol

import requests
from pydantic import ValidationError
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from src.timetable.config import TimetableConfig, get_config
from src.timetable.errors import PermanentError, RateLimitError, TransientError
from src.timetable.logging import get_logger
from src.timetable.models import FilterOptions, RawRecord

logger = get_logger(__name__)

OPTIONS_PATH = "/timetables/options"
RECORDS_PATH = "/timetables"


class TimetableSource(Protocol):
    """Data-access collaborator consumed by the page controller.

    Both methods raise FetchError subclasses on failure. A None branch or
    division means no constraint on that dimension.
    """

    async def fetch_filter_options(self) -> FilterOptions: ...

    async def fetch_records(
        self, branch: str | None, division: str | None
    ) -> list[RawRecord]: ...


class TimetableApiClient:
    """Client for the timetable storage service REST API."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 15.0,
        retry_attempts: int = 3,
        retry_wait: float = 2.0,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_wait = retry_wait
        self.session = session if session is not None else requests.Session()

    @classmethod
    def from_config(cls, config: TimetableConfig | None = None) -> "TimetableApiClient":
        config = config or get_config()
        return cls(
            config.timetable_api_url,
            timeout=config.request_timeout_seconds,
            retry_attempts=config.fetch_retry_attempts,
            retry_wait=config.fetch_retry_wait_seconds,
        )

    def _request(self, path: str, params: dict[str, str] | None = None) -> Any:
        """GET one endpoint and unwrap its success envelope.

        Raises:
            TransientError: Timeout, connection failure or 5xx.
            RateLimitError: 429 Too Many Requests.
            PermanentError: Other HTTP errors, invalid JSON or success=false.
        """
        url = f"{self.base_url}{path}"
        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
        except requests.Timeout as e:
            logger.warning("request_timeout", url=url, error=str(e))
            raise TransientError(f"Request to {url} timed out") from e
        except requests.ConnectionError as e:
            logger.warning("request_connection_error", url=url, error=str(e))
            raise TransientError(f"Could not connect to {url}") from e
        except requests.RequestException as e:
            raise PermanentError(f"Request to {url} failed: {e}") from e

        if resp.status_code == 429:
            raise RateLimitError(f"Rate limited by {url}")
        if resp.status_code >= 500:
            raise TransientError(f"{url} returned {resp.status_code}")
        if resp.status_code != 200:
            raise PermanentError(f"{url} returned {resp.status_code}: {resp.text[:200]}")

        try:
            payload = resp.json()
        except ValueError as e:
            raise PermanentError(f"{url} returned invalid JSON") from e

        if not isinstance(payload, dict):
            raise PermanentError(f"{url} returned an unexpected payload")
        if not payload.get("success"):
            raise PermanentError(payload.get("error") or f"{url} reported failure")
        return payload.get("data")

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        for attempt in Retrying(
            stop=stop_after_attempt(self.retry_attempts),
            wait=wait_fixed(self.retry_wait),
            retry=retry_if_exception_type(TransientError),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info(
                        "request_retry",
                        path=path,
                        attempt=attempt.retry_state.attempt_number,
                    )
                return self._request(path, params)

    def get_filter_options(self) -> FilterOptions:
        """Fetch every branch and division known to the storage service."""
        data = self._get(OPTIONS_PATH) or {}
        if isinstance(data, dict):
            # A null list falls back to empty without losing the other one
            data = {key: value for key, value in data.items() if value is not None}
        try:
            options = FilterOptions.model_validate(data)
        except ValidationError as e:
            raise PermanentError(f"Invalid filter options: {e}") from e

        logger.info(
            "filter_options_fetched",
            branches=len(options.branches),
            divisions=len(options.divisions),
        )
        return options

    def get_records(
        self, branch: str | None = None, division: str | None = None
    ) -> list[RawRecord]:
        """Fetch stored timetables, optionally constrained by branch/division.

        Records that fail validation are skipped; their rows never reach the
        parser.
        """
        params = {}
        if branch is not None:
            params["branch"] = branch
        if division is not None:
            params["division"] = division

        data = self._get(RECORDS_PATH, params or None)
        if data is None:
            data = []
        if not isinstance(data, list):
            raise PermanentError("Timetable list payload is not a list")

        records: list[RawRecord] = []
        for index, item in enumerate(data):
            try:
                records.append(RawRecord.model_validate(item))
            except ValidationError as e:
                logger.warning("record_skipped", index=index, error=str(e))
                continue

        logger.info(
            "records_fetched",
            branch=branch,
            division=division,
            count=len(records),
            skipped=len(data) - len(records),
        )
        return records

    async def fetch_filter_options(self) -> FilterOptions:
        return await asyncio.to_thread(self.get_filter_options)

    async def fetch_records(
        self, branch: str | None, division: str | None
    ) -> list[RawRecord]:
        return await asyncio.to_thread(self.get_records, branch, division)

    def close(self) -> None:
        self.session.close()
