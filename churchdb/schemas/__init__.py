"""Pydantic Schemas — request/response validation for the auth endpoints.

Invariants:
    - Directory lookups return store rows as-is (columns owned by the database),
      so only auth payloads are modelled here
"""
