"""Transaction Schemas — seed record validation, listing query, and listing responses.

Invariants:
    - SeedRecord enforces price >= 0 and a parseable dateOfSale
    - SeedRecord normalizes dateOfSale to UTC and price to 2 decimal places,
      so the snapshot built at import equals the one rebuilt from the database
    - ListingQuery: page >= 1, 1 <= per_page <= settings.max_per_page

Design Decisions:
    - Responses use camelCase aliases (perPage, dateOfSale) for the web client
    - price serialized as a JSON number, not a Decimal string
"""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from salescope.core.domain_types import Page, Transaction

_CENT = Decimal("0.01")


class CamelModel(BaseModel):
    """Base for response bodies serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SeedRecord(BaseModel):
    """One record of the seed dataset payload."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    title: str
    description: str = ""
    price: Decimal = Field(ge=0)
    category: str
    image: str = ""
    sold: bool = False
    date_of_sale: datetime = Field(alias="dateOfSale")

    @field_validator("price")
    @classmethod
    def round_to_cents(cls, v: Decimal) -> Decimal:
        return v.quantize(_CENT, rounding=ROUND_HALF_UP)

    @field_validator("date_of_sale")
    @classmethod
    def normalize_to_utc(cls, v: datetime) -> datetime:
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            title=self.title,
            description=self.description,
            category=self.category,
            price=self.price,
            image=self.image,
            sold=self.sold,
            date_of_sale=self.date_of_sale,
        )


class ListingQuery(BaseModel):
    """Typed listing parameters, validated before the core sees them."""
    search: str = ""
    page: int = Field(1, ge=1)
    per_page: int = Field(10, ge=1)
    month: str | None = None


class TransactionResponse(CamelModel):
    id: int
    title: str
    description: str
    price: float
    category: str
    image: str
    sold: bool
    date_of_sale: datetime

    @classmethod
    def from_domain(cls, t: Transaction) -> "TransactionResponse":
        return cls(
            id=t.id,
            title=t.title,
            description=t.description,
            price=float(t.price),
            category=t.category,
            image=t.image,
            sold=t.sold,
            date_of_sale=t.date_of_sale,
        )


class PageResponse(CamelModel):
    """Listing page — {total, page, perPage, items}."""
    total: int
    page: int
    per_page: int
    items: list[TransactionResponse]

    @classmethod
    def from_domain(cls, page: Page) -> "PageResponse":
        return cls(
            total=page.total,
            page=page.page,
            per_page=page.per_page,
            items=[TransactionResponse.from_domain(t) for t in page.items],
        )


class ImportResponse(CamelModel):
    inserted: int
    snapshot_version: int
