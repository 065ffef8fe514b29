"""Core Layer — session gate and auth decisions, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from api/, infrastructure/, or db/
    - Session state lives in SessionStore; nothing else holds tokens

Design Decisions:
    - Functional core separated from imperative shell
"""
