from __future__ import annotations

import logging

import httpx

from ..models.config_models import HttpConfig

"""HTTP helpers shared by the row processor and the metric lookup.

One synchronous httpx client is used for a whole run. Requests are made one at
a time and never retried; the row processor paces them with a fixed delay.
"""

__all__ = [
    "FetchError",
    "build_client",
    "fetch_text",
]

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a test document cannot be fetched.

    The message is the text shown in the report's description column.
    """

    def __init__(self, url: str, reason: str, status_code: int | None = None) -> None:
        super().__init__(f"Failed to fetch {url}: {reason}")
        self.url = url
        self.status_code = status_code


def build_client(http: HttpConfig, transport: httpx.BaseTransport | None = None) -> httpx.Client:
    """Create the run's httpx client (tests pass an ``httpx.MockTransport``)."""
    return httpx.Client(
        headers={"user-agent": http.user_agent},
        timeout=httpx.Timeout(http.timeout_seconds),
        follow_redirects=True,
        transport=transport,
    )


def fetch_text(client: httpx.Client, url: str) -> str:
    """GET ``url`` and return the body as text.

    Raises:
        FetchError: On any status other than 200 or on a transport failure.
    """
    logger.debug(f"GET {url}")
    try:
        resp = client.get(url)
    except httpx.HTTPError as e:
        raise FetchError(url, str(e) or type(e).__name__) from e
    if resp.status_code != 200:
        raise FetchError(url, f"HTTP {resp.status_code}", status_code=resp.status_code)
    return resp.text
