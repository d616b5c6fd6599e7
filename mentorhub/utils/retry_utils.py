from http import HTTPStatus
from tenacity import (
    stop_after_attempt,
    wait_exponential,
    retry_if_exception,
    Retrying,
)


def _is_transient(error: BaseException) -> bool:
    """
    Decide whether an error is worth retrying.

    `ValueError` and provider responses with a 4xx status code are treated as
    permanent. Anything else, such as a timeout or a 5xx, is retried.
    """
    if isinstance(error, ValueError):
        return False
    status_code = getattr(error, "status_code", None)
    if isinstance(status_code, int) and (
        HTTPStatus.BAD_REQUEST <= status_code < HTTPStatus.INTERNAL_SERVER_ERROR
    ):
        return False
    return True


class RetryUtils:
    """
    A utility class that provides pre-configured Tenacity retry instances.
    """

    def __init__(self):
        self._retry_on_transient = Retrying(
            retry=retry_if_exception(_is_transient),
            stop=stop_after_attempt(3),
            wait=wait_exponential(multiplier=1, min=1, max=3),
            reraise=True,
        )

    @property
    def get_retry_on_transient(self) -> Retrying:
        """
        Returns a Tenacity Retrying instance configured for transient errors.
        This instance will retry up to 3 times with exponential backoff,
        excluding `ValueError` and 4xx provider errors from the retry conditions.
        """
        return self._retry_on_transient
