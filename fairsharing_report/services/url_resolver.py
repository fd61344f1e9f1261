from __future__ import annotations

import re

from ..models.worklist_row import WorklistRow

"""Resolve the test-document URL carried by a worklist cell.

A cell can carry its URL in three ways, tried in this order:
1. a HYPERLINK("url", "label") formula (first quoted argument, verbatim)
2. a hyperlink attached to the cell
3. display text that itself starts with ``http``
"""

__all__ = [
    "extract_hyperlink_formula_url",
    "resolve_url",
]

_HYPERLINK_FORMULA = re.compile(r'HYPERLINK\s*\(\s*"([^"]*)"', re.IGNORECASE)


def extract_hyperlink_formula_url(formula_text: str | None) -> str | None:
    """Return the first string literal argument of a HYPERLINK formula."""
    if not formula_text:
        return None
    match = _HYPERLINK_FORMULA.search(formula_text)
    if match is None or not match.group(1):
        return None
    return match.group(1)


def resolve_url(row: WorklistRow) -> str | None:
    """Return the canonical source URL for ``row`` or None when it carries none."""
    url = extract_hyperlink_formula_url(row.formula_text)
    if url:
        return url
    if row.hyperlink_url and row.hyperlink_url.strip():
        return row.hyperlink_url.strip()
    if row.display_value and row.display_value.startswith("http"):
        return row.display_value
    return None
