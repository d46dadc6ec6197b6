"""Test environment: in-memory SQLite, fast bcrypt, fixed JWT secret. Must run before identity is imported."""

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-at-least-32-bytes"
os.environ["APP_ENV"] = "dev"
