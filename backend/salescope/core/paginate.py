"""Paginated Listing — page slicing over an already-filtered sequence.

Invariants:
    - total is the full match count, independent of the page requested
    - items == matches[(page-1)*per_page : page*per_page]
    - Out-of-range pages return empty items with the correct total
    - page and per_page must be positive (ValueError otherwise)
"""

from typing import Sequence

from salescope.core.domain_types import Page, Transaction


def paginate(
    matches: Sequence[Transaction], page: int = 1, per_page: int = 10,
) -> Page:
    """Slice one page out of `matches`, keeping their order."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if per_page < 1:
        raise ValueError(f"per_page must be >= 1, got {per_page}")
    start = (page - 1) * per_page
    return Page(
        items=tuple(matches[start:start + per_page]),
        total=len(matches),
        page=page,
        per_page=per_page,
    )
