"""Root conftest - shared test configuration."""

import os

# Settings require a connection string; tests never reach a real server
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_FORMAT", "text")
