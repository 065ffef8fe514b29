"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or use the dev secret
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault(
    "SESSION_SECRET", "test-session-secret-0123456789abcdef",
)
os.environ.setdefault("LOG_FORMAT", "text")
