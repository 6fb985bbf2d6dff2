"""Root conftest — shared test configuration."""

import os

# Ensure tests never touch a real database or the local forms.db
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("ENV", "local")
