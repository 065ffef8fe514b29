"""Church Directory Backend — read-only family/member lookups behind a login session.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)
"""
