"""Error taxonomy shared by the query service and the HTTP client."""


class ChartableError(Exception):
    """Base class for all chartable errors."""

    retryable = False


class ValidationInputError(ChartableError, ValueError):
    """Raised when a numeric request parameter cannot be parsed.

    Always recovered locally by parse-or-default helpers; it never
    crosses the service boundary.
    """


class DataUnavailableError(ChartableError):
    """Raised when the backing record store cannot be loaded."""


class ClientError(ChartableError):
    """Base class for failures observed by the HTTP client."""

    retryable = True


class NetworkError(ClientError):
    """The service could not be reached at all."""


class RequestTimeoutError(ClientError):
    """The request exceeded its deadline and was aborted."""


class HTTPStatusError(ClientError):
    """The service answered with a non-2xx status code."""

    def __init__(self, message: str, status: int, reason: str = "") -> None:
        super().__init__(message)
        self.status = status
        self.reason = reason

    @property
    def retryable(self) -> bool:  # type: ignore[override]
        # 4xx means the request itself is wrong; retrying will not help.
        return self.status >= 500


def should_retry(error: BaseException) -> bool:
    """Return True if a failed request is worth retrying."""
    if isinstance(error, ChartableError):
        return bool(error.retryable)
    return False
