"""Infrastructure Layer — database pool, session cookie codec, logging setup.

Invariants:
    - Infrastructure never imports from api/
    - All store calls wrapped with error mapping
"""
