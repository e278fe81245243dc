"""HTTP GET with exponential backoff on transient failures."""

import sys

import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from sitegate.config import get_config


def _is_transient(exc: BaseException) -> bool:
    """Return True if the exception is a transient HTTP/network error worth retrying."""
    if isinstance(exc, httpx.TimeoutException):
        return True
    if isinstance(exc, httpx.ConnectError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in (429, 500, 502, 503)
    return False


def get_with_retry(client: httpx.Client, url: str, max_retries: int = 3, **kwargs) -> httpx.Response:
    """GET ``url`` and raise for non-2xx responses.

    Retries on HTTP 429/500/502/503, connection errors, and timeouts.
    Other errors (404 for an unknown font family, etc.) are raised immediately.
    """
    retries = get_config().get("http_max_retries", max_retries)

    @retry(
        stop=stop_after_attempt(retries + 1),  # +1 because first attempt counts
        wait=wait_exponential(multiplier=1, min=2, max=16),
        retry=retry_if_exception(_is_transient),
        reraise=True,
        before_sleep=lambda state: print(
            f"[SiteGate] Transient error: {state.outcome.exception()!r}. "
            f"Retrying in {state.next_action.sleep:.0f}s "
            f"(attempt {state.attempt_number}/{retries})...",
            file=sys.stderr,
        ),
    )
    def _get():
        response = client.get(url, **kwargs)
        response.raise_for_status()
        return response

    return _get()
