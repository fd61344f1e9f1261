from __future__ import annotations

from dataclasses import dataclass

"""WorklistRow model.

A WorklistRow is the raw content of one cell in the configured source column,
read fresh from the workbook on every run. Nothing here is persisted.
"""

__all__ = [
    "WorklistRow",
]


@dataclass(frozen=True)
class WorklistRow:
    """Raw cell content for a single worklist row.

    ``display_value`` is the value a user sees (the cached value for formula cells),
    ``formula_text`` the formula source including the leading ``=`` when the cell
    holds a formula, and ``hyperlink_url`` the link target attached to the cell.
    """
    row_index: int  # 1-based sheet row number
    display_value: str | None = None
    formula_text: str | None = None
    hyperlink_url: str | None = None

    @property
    def is_empty(self) -> bool:
        """True when the cell carries no text, no formula and no link."""
        return not (
            (self.display_value or "").strip()
            or (self.formula_text or "").strip()
            or (self.hyperlink_url or "").strip()
        )

    @property
    def text(self) -> str:
        return (self.display_value or "").strip()
