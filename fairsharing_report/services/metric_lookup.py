from __future__ import annotations

import logging
from typing import Any

import httpx

from ..models.config_models import DEFAULT_METRIC_BASE_URL
from ..models.lookup_result import MetricLookupResult

"""FAIRsharing metric-name lookup.

Fetches ``<base>/FAIRsharing.<record id>`` as JSON and projects one field out of
it with a dotted path such as ``metadata.name``. Failures never raise; they
come back as a MetricLookupResult whose status tells a missing path, an HTTP
error and a transport error apart.
"""

__all__ = [
    "MISSING",
    "MetricLookup",
    "get_nested_value",
    "metric_record_url",
]

logger = logging.getLogger(__name__)


class _Missing:
    def __repr__(self) -> str:  # pragma: no cover (trivial)
        return "MISSING"


MISSING: Any = _Missing()


def get_nested_value(data: Any, path: str) -> Any:
    """Walk ``data`` along the dot-separated ``path``.

    Only mappings are indexed. Returns ``MISSING`` as soon as a segment is
    absent or the current value is not a mapping. A JSON ``null`` at the end of
    the path counts as missing.

    >>> get_nested_value({"metadata": {"name": "X"}}, "metadata.name")
    'X'
    >>> get_nested_value({"metadata": {}}, "metadata.name") is MISSING
    True
    """
    current = data
    for segment in path.split("."):
        if not isinstance(current, dict) or segment not in current:
            return MISSING
        current = current[segment]
    if current is None:
        return MISSING
    return current


def metric_record_url(record_id: str, base_url: str = DEFAULT_METRIC_BASE_URL) -> str:
    return f"{base_url.rstrip('/')}/FAIRsharing.{record_id}"


class MetricLookup:
    """Resolve a FAIRsharing record id to a metric name.

    Args:
        client: httpx client shared with the rest of the run
        json_path: dotted path of the field to report
        base_url: FAIRsharing site root
    """

    def __init__(
        self,
        client: httpx.Client,
        json_path: str,
        *,
        base_url: str = DEFAULT_METRIC_BASE_URL,
    ) -> None:
        self.client = client
        self.json_path = json_path
        self.base_url = base_url

    def lookup(self, record_id: str) -> MetricLookupResult:
        url = metric_record_url(record_id, self.base_url)
        try:
            resp = self.client.get(url, headers={"Accept": "application/json"})
            if resp.status_code != 200:
                logger.warning(f"metric lookup {url}: HTTP {resp.status_code}")
                return MetricLookupResult.http_error(resp.status_code)
            data = resp.json()
        except Exception as e:  # network errors, invalid URLs, undecodable bodies
            logger.warning(f"metric lookup {url} failed: {e}")
            return MetricLookupResult.transport_error(str(e) or type(e).__name__)

        value = get_nested_value(data, self.json_path)
        if value is MISSING:
            logger.info(f"metric lookup {url}: no value at '{self.json_path}'")
            return MetricLookupResult.path_miss(f"no value at '{self.json_path}'")
        return MetricLookupResult.found(value)
