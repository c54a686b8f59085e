"""Test environment: in-memory SQLite, cheap bcrypt, fixed signing secret."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET", "test-signing-secret-that-is-at-least-32-bytes")
os.environ.setdefault("LOG_LEVEL", "WARNING")
