"""Database Metadata — declarative base for the directory schema.

Invariants:
    - The schema is owned by the deployed database; these declarations mirror it
      for local setup and tests
"""
