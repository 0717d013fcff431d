"""
db/models/scheme.py

Budget scheme record, keyed for imports by its 13-digit scheme code.
"""

from __future__ import annotations

import uuid
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Numeric, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from db.models.department import Department

AMOUNT = Numeric(18, 2)


class Scheme(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "schemes"

    scheme_code: Mapped[str] = mapped_column(
        String(13),
        nullable=False,
        unique=True,
        comment="Natural key: 13 digits, zero padded",
    )
    scheme_name: Mapped[str] = mapped_column(String(500), nullable=False)
    financial_year: Mapped[str | None] = mapped_column(String(9), nullable=True)
    total_budget_provision: Mapped[Decimal] = mapped_column(AMOUNT, nullable=False, default=Decimal("0"))
    progressive_allotment: Mapped[Decimal] = mapped_column(AMOUNT, nullable=False, default=Decimal("0"))
    actual_progressive_expenditure: Mapped[Decimal] = mapped_column(
        AMOUNT,
        nullable=False,
        default=Decimal("0"),
        comment="Actual progressive expenditure up to December",
    )
    pct_budget_expenditure: Mapped[Decimal] = mapped_column(AMOUNT, nullable=False, default=Decimal("0"))
    pct_actual_expenditure: Mapped[Decimal] = mapped_column(AMOUNT, nullable=False, default=Decimal("0"))
    provisional_expenditure_current_month: Mapped[Decimal] = mapped_column(
        AMOUNT,
        nullable=False,
        default=Decimal("0"),
    )
    department_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("departments.id", ondelete="CASCADE"),
        nullable=False,
    )

    department: Mapped["Department"] = relationship("Department", back_populates="schemes")

    __table_args__ = (
        Index("ix_schemes_department_id", "department_id"),
        Index("ix_schemes_financial_year", "financial_year"),
    )

    def __repr__(self) -> str:
        return f"<Scheme id={self.id} scheme_code={self.scheme_code!r}>"
