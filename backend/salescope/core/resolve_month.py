"""Month Resolver — maps an English month name to its calendar number.

Invariants:
    - Accepts exactly the twelve full English month names, any case
    - Abbreviations, numerals and blank strings raise InvalidMonthError
    - Pure: no IO, no locale dependence

Design Decisions:
    - Explicit name table over calendar.month_name: the latter follows the
      process locale (ADR: deterministic across deployments)
"""

from salescope.core.domain_types import MonthNumber
from salescope.core.errors import InvalidMonthError

MONTH_NAMES: tuple[str, ...] = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

_MONTH_NUMBERS: dict[str, int] = {
    name.lower(): number for number, name in enumerate(MONTH_NAMES, start=1)
}


def resolve_month(name: str) -> MonthNumber:
    """Return 1–12 for a month name, or raise InvalidMonthError."""
    number = _MONTH_NUMBERS.get(name.strip().lower())
    if number is None:
        raise InvalidMonthError(name)
    return MonthNumber(number)
