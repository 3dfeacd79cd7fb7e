"""HTTP client wrapper around requests."""

import logging
import time
from collections.abc import Iterable, Mapping

import requests

from bibsync.core.exceptions import NetworkError

logger = logging.getLogger(__name__)


class HTTPClient:
    """Thin ``requests.Session`` wrapper that raises ``NetworkError``.

    Responses with a status in ``retryable_statuses`` are retried up to
    ``max_retries`` times with exponential backoff. Transport errors are not
    retried.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        timeout: float | None = None,
        max_retries: int = 0,
        retryable_statuses: Iterable[int] = (),
        backoff_factor: float = 1.0,
        session: requests.Session | None = None,
    ):
        self.session = session or requests.Session()
        if headers:
            self.session.headers.update(headers)
        self.timeout = timeout
        self.max_retries = max_retries
        self.retryable_statuses = frozenset(retryable_statuses)
        self.backoff_factor = backoff_factor

    def get(self, url: str, **kwargs) -> requests.Response:
        """Issue a GET request and return a successful response.

        Raises:
            NetworkError: On transport failure or a non-success status.
        """
        kwargs.setdefault("timeout", self.timeout)
        attempt = 0
        while True:
            try:
                resp = self.session.get(url, **kwargs)
            except requests.RequestException as exc:
                raise NetworkError(f"Request to {url} failed: {exc}", url=url) from exc

            if resp.status_code in self.retryable_statuses and attempt < self.max_retries:
                delay = self.backoff_factor * (2**attempt)
                attempt += 1
                logger.debug(
                    "Retryable status %d from %s, retry %d/%d in %.1fs",
                    resp.status_code,
                    url,
                    attempt,
                    self.max_retries,
                    delay,
                )
                time.sleep(delay)
                continue

            if not resp.ok:
                raise NetworkError(
                    f"GET {url} returned HTTP {resp.status_code}",
                    url=url,
                    status_code=resp.status_code,
                )
            return resp

    def get_bytes(self, url: str, **kwargs) -> bytes:
        return self.get(url, **kwargs).content

    def get_text(self, url: str, **kwargs) -> str:
        return self.get(url, **kwargs).text

    def close(self) -> None:
        self.session.close()


__all__ = ["HTTPClient"]
