"""Route Modules — one file per concern.

Invariants:
    - Each module defines its own APIRouter
    - pages.router is registered last: it owns the catch-all
"""
