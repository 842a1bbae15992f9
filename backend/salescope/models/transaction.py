"""Transaction ORM — persisted rows of the imported product-sale dataset.

Invariants:
    - row_id is an autoincrement surrogate key; ordering by it gives store order
    - id (external record id) is unique
    - price is non-negative Numeric(12, 2); date_of_sale is non-nullable

Design Decisions:
    - Rows are only written by the seed import and only read to rebuild the
      in-memory snapshot (ADR: queries never hit the database directly)
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Boolean, CheckConstraint, DateTime, Integer, Numeric, String, Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from salescope.core.domain_types import Transaction
from salescope.db.base import Base


class TransactionRecord(Base):
    """One imported product-sale transaction."""
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_transactions_price_non_negative"),
    )

    row_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    category: Mapped[str] = mapped_column(String(200), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    sold: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    date_of_sale: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )

    def to_domain(self) -> Transaction:
        return Transaction(
            id=self.id,
            title=self.title,
            description=self.description,
            category=self.category,
            price=Decimal(self.price),
            image=self.image,
            sold=self.sold,
            date_of_sale=self.date_of_sale,
        )
