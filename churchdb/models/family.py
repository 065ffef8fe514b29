"""Family ORM — a household record in the congregation directory.

Invariants:
    - family_id is the identity key; family_sr_no is the display serial
    - family_sr_no unique per deployment (a lookup resolves to at most one family)
    - Members deleted with their family (store-owned policy)
"""

from typing import TYPE_CHECKING

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from churchdb.db.base import Base

if TYPE_CHECKING:
    from churchdb.models.family_member import FamilyMember


class Family(Base):
    """Household — owns its members."""
    __tablename__ = "family_groups"

    family_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    family_sr_no: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True,
    )
    family_name: Mapped[str | None] = mapped_column(String(255))
    head_of_family: Mapped[str | None] = mapped_column(String(255), index=True)
    community_name: Mapped[str | None] = mapped_column(String(255))
    zone_no: Mapped[str | None] = mapped_column(String(32))
    contact_phone: Mapped[str | None] = mapped_column(String(64))

    members: Mapped[list["FamilyMember"]] = relationship(
        "FamilyMember", back_populates="family",
        cascade="all, delete-orphan",
        order_by="FamilyMember.sr_no_in_family",
    )
