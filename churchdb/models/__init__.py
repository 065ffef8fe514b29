"""ORM Models — SQLAlchemy declarations mirroring the directory tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Family is the aggregate root; members scoped by family_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any metadata operation
    - Read paths use raw SQL (infrastructure/database.py); these classes serve
      schema creation and test seeding
"""

from churchdb.models.family import Family  # noqa: F401
from churchdb.models.family_member import FamilyMember  # noqa: F401
