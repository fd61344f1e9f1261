from __future__ import annotations

import re

__all__ = [
    "extract_record_id",
]

_RECORD_ID = re.compile(r"FAIRsharing\.(\w+)", re.IGNORECASE)


def extract_record_id(metric_url: str | None) -> str | None:
    """Return the token after ``FAIRsharing.`` in ``metric_url``.

    >>> extract_record_id("https://doi.org/10.25504/FAIRsharing.AbC123")
    'AbC123'
    >>> extract_record_id("no-pattern-here") is None
    True
    """
    if not metric_url:
        return None
    match = _RECORD_ID.search(metric_url)
    return match.group(1) if match else None
