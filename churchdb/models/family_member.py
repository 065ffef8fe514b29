"""Family Member ORM — a person belonging to exactly one family.

Invariants:
    - family_id references an existing family_groups row
    - sr_no_in_family orders members within a family; not globally unique
"""

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from churchdb.db.base import Base

if TYPE_CHECKING:
    from churchdb.models.family import Family


class FamilyMember(Base):
    __tablename__ = "family_members"

    member_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    family_id: Mapped[int] = mapped_column(
        ForeignKey("family_groups.family_id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    sr_no_in_family: Mapped[int] = mapped_column(Integer, nullable=False)
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    relation_to_head: Mapped[str | None] = mapped_column(String(64))
    gender: Mapped[str | None] = mapped_column(String(16))
    date_of_birth: Mapped[date | None] = mapped_column(Date)
    occupation: Mapped[str | None] = mapped_column(String(128))

    family: Mapped["Family"] = relationship("Family", back_populates="members")
