"""Predicate Filter — composable tests over a Transaction.

Invariants:
    - Month predicate ignores the year: one month matches across every year
      present in the dataset
    - Search is a case-insensitive substring test over title, description,
      and the canonical decimal string of price
    - Blank search terms are treated as no search; other terms match verbatim,
      surrounding whitespace included
    - Filtering preserves store order and is deterministic for a snapshot

Design Decisions:
    - Price-as-text matching is kept on purpose: searching "1" also matches
      prices 10, 21, 150 (legacy behavior, covered by tests)
    - Predicates built through lru_cache: inputs are hashable, predicates pure
"""

from decimal import Decimal
from functools import lru_cache
from typing import Iterable

from salescope.core.domain_types import Predicate, Transaction


def price_text(price: Decimal) -> str:
    """Canonical decimal form: no exponent, no trailing fractional zeros."""
    text = format(price, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def _accept_all(_: Transaction) -> bool:
    return True


@lru_cache(maxsize=16)
def month_predicate(month: int) -> Predicate:
    """Match transactions sold in `month` of any year."""
    def matches(t: Transaction) -> bool:
        return t.date_of_sale.month == month
    return matches


@lru_cache(maxsize=256)
def search_predicate(term: str) -> Predicate:
    """Match when `term` occurs in title, description, or price text."""
    needle = term.lower()

    def matches(t: Transaction) -> bool:
        return (
            needle in t.title.lower()
            or needle in t.description.lower()
            or needle in price_text(t.price)
        )
    return matches


@lru_cache(maxsize=256)
def build_predicate(month: int | None = None, search: str = "") -> Predicate:
    """AND-compose the month and search predicates that apply."""
    parts: list[Predicate] = []
    if month is not None:
        parts.append(month_predicate(month))
    if search.strip():
        parts.append(search_predicate(search))

    if not parts:
        return _accept_all
    if len(parts) == 1:
        return parts[0]

    def matches(t: Transaction) -> bool:
        return all(p(t) for p in parts)
    return matches


def apply_predicate(
    transactions: Iterable[Transaction], predicate: Predicate,
) -> list[Transaction]:
    """Select matching transactions, keeping store order."""
    return [t for t in transactions if predicate(t)]
