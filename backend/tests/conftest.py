"""Root conftest: shared test configuration."""

import os

# Importing todo_api.main builds the app from env; keep it off the real ./data.db
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///test.db")
os.environ.setdefault("LOG_FORMAT", "text")
