"""
db/models/department.py

Department model: the grouping every scheme belongs to.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from db.models.scheme import Scheme


class Department(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    Administrative department owning a set of budget schemes.

    Bulk imports attach newly created schemes to one department chosen for
    the whole batch.
    """

    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
    )

    name_hn: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Department name in Hindi",
    )

    # ── Relationships ──────────────────────────────────────────────────────────

    schemes: Mapped[list["Scheme"]] = relationship(
        "Scheme",
        back_populates="department",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<Department id={self.id} name={self.name!r}>"
