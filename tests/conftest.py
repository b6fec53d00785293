"""Test environment: in-memory SQLite, a fixed JWT secret and the cheapest bcrypt cost.

Set before app.core.config is imported so the cached settings pick them up.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret-not-for-production-use-only")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")
