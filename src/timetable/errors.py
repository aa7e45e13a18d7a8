"""Error hierarchy for timetable data retrieval.

Only the fetch layer can fail: parsing and grid assembly are total. The
hierarchy lets tenacity retry transient failures (timeouts, 5xx, 429) and
fail fast on permanent ones (4xx, rejected requests, malformed payloads).

Example usage with tenacity:
    @retry(retry=retry_if_exception_type(TransientError), stop=stop_after_attempt(3))
    def fetch_records(branch, division):
        ...
"""


class TimetableError(Exception):
    """Base exception for all timetable errors."""

    pass


class FetchError(TimetableError):
    """Filter options or timetable records could not be retrieved.

    Surfaced to the user as a notice; previously shown data is kept.
    """

    pass


class TransientError(FetchError):
    """Temporary failure that may succeed on retry.

    Examples: network timeouts, connection resets, 503 Service Unavailable.
    """

    pass


class RateLimitError(TransientError):
    """Storage service answered 429 Too Many Requests."""

    pass


class PermanentError(FetchError):
    """Failure that won't succeed on retry.

    Examples: 404 on the timetable endpoint, ``success: false`` responses,
    records that fail model validation.
    """

    pass
