from __future__ import annotations

import re
from typing import Protocol

"""Pattern-based field extraction from RDF documents.

Test documents arrive in several serializations (N-Triples, Turtle, RDF/XML),
so fields are pulled out with ordered regular expressions rather than a full
RDF parser. Callers depend on the ``RdfExtractor`` protocol, so a stricter
parser can be dropped in without touching the row processor.
"""

__all__ = [
    "RdfExtractor",
    "RegexRdfExtractor",
    "find_metric_url",
    "extract_description",
    "METRIC_URL_PATTERNS",
    "DESCRIPTION_PATTERNS",
]

# doi.org form first: it wins even when a fairsharing.org form appears earlier in the text
METRIC_URL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"https://doi\.org/10\.25504/FAIRsharing\.[A-Za-z0-9]+"),
    re.compile(r"https://fairsharing\.org/10\.25504/FAIRsharing\.[A-Za-z0-9]+"),
)

_TAG = re.compile(r"<[^>]+>")

# (pattern, strip embedded markup from the capture)
DESCRIPTION_PATTERNS: tuple[tuple[re.Pattern[str], bool], ...] = (
    (re.compile(r'<http://purl\.org/dc/terms/description>\s+"([^"]*)"'), False),
    (re.compile(r'<dcterms:description(?:\s[^>]*)?>\s*"([^"]*)"\s*</dcterms:description>'), False),
    (re.compile(r"<dcterms:description(?:\s[^>]*)?>(.*?)</dcterms:description>", re.DOTALL), True),
    (re.compile(r'dcterms:description\s+"([^"]*)"'), False),
)


class RdfExtractor(Protocol):
    def find_metric_url(self, text: str) -> str | None: ...

    def extract_description(self, text: str) -> str | None: ...


def find_metric_url(text: str) -> str | None:
    """Return the first FAIRsharing metric URL in ``text``.

    The doi.org form is searched across the whole text before the
    fairsharing.org form is tried at all.
    """
    for pattern in METRIC_URL_PATTERNS:
        match = pattern.search(text)
        if match is not None:
            return match.group(0)
    return None


def extract_description(text: str) -> str | None:
    """Return the dcterms description, trimmed, or None.

    Patterns are tried in order and the first one yielding a non-empty capture
    wins; a pattern whose capture is blank counts as no match.
    """
    for pattern, strip_tags in DESCRIPTION_PATTERNS:
        match = pattern.search(text)
        if match is None:
            continue
        value = match.group(1)
        if strip_tags:
            value = _TAG.sub("", value)
        value = value.strip()
        if value:
            return value
    return None


class RegexRdfExtractor:
    """Default ``RdfExtractor`` built on the module-level patterns."""

    def find_metric_url(self, text: str) -> str | None:
        return find_metric_url(text)

    def extract_description(self, text: str) -> str | None:
        return extract_description(text)
