"""API Layer — FastAPI routes, middleware and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - /api/* and /ping* always answer JSON

Design Decisions:
    - Thin routes delegate to services/ and core/
"""
