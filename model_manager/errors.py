# DEPENDENCIES
from typing import Union
from typing import Optional


class ExternalAnalysisError(Exception):
    """
    Base class for failures of the external reasoning capability
    """
    def __init__(self, message: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class QuotaExceeded(ExternalAnalysisError):
    """
    External request budget exhausted: never retried, callers fall back
    """


class TransientFailure(ExternalAnalysisError):
    """
    Retryable upstream condition (overload, 5xx, timeout)
    """


class OtherFailure(ExternalAnalysisError):
    """
    Any other failure of an external call
    """


QUOTA_MARKERS      = ("429", "quota", "rate limit", "resource exhausted", "resource_exhausted")
TRANSIENT_MARKERS  = ("503", "502", "504", "overloaded", "service unavailable", "timed out", "timeout", "connection")

QUOTA_STATUS_CODES = {429}
TRANSIENT_STATUS   = {500, 502, 503, 504}


def classify_error(error: Union[BaseException, str, None], status_code: Optional[int] = None) -> ExternalAnalysisError:
    """
    Map an exception or error message to QuotaExceeded, TransientFailure or OtherFailure

    Already-classified errors are returned unchanged

    Arguments:
    ----------
        error       { Exception | str } : Raised exception or provider error message

        status_code      { int }        : HTTP status code when known

    Returns:
    --------
        { ExternalAnalysisError }       : Classified error instance
    """
    if isinstance(error, ExternalAnalysisError):
        return error

    message = str(error) if error is not None else ""

    if status_code is None:
        status_code = _status_code_of(error)

    if status_code in QUOTA_STATUS_CODES:
        return QuotaExceeded(message, status_code = status_code)

    if status_code in TRANSIENT_STATUS:
        return TransientFailure(message, status_code = status_code)

    lowered = message.lower()

    if any(marker in lowered for marker in QUOTA_MARKERS):
        return QuotaExceeded(message, status_code = status_code)

    if isinstance(error, (TimeoutError, ConnectionError)) or any(marker in lowered for marker in TRANSIENT_MARKERS):
        return TransientFailure(message, status_code = status_code)

    return OtherFailure(message, status_code = status_code)


def _status_code_of(error) -> Optional[int]:
    """
    Pull an HTTP status code off provider exceptions (requests, openai, anthropic)
    """
    for attribute in ("status_code", "status"):
        value = getattr(error, attribute, None)

        if isinstance(value, int):
            return value

    response = getattr(error, "response", None)
    value    = getattr(response, "status_code", None)

    return value if isinstance(value, int) else None
