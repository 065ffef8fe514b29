"""Boundary Protocols — contracts between the session gate and its collaborators.

Invariants:
    - Gate logic never imports a concrete credential source
    - Implementations provided by the shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Sync on purpose: the only implementation today is an in-memory comparison;
      a database-backed user store would add an async variant next to this one
"""

from typing import Protocol

from churchdb.core.domain_types import Role


class CredentialProvider(Protocol):
    """Resolves a username/password pair to a role, or None on mismatch."""
    def verify(self, username: str, password: str) -> Role | None: ...
