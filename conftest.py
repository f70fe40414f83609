import os

# Default to an in-memory SQLite database and a local redis for tests
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")
os.environ.setdefault("AUTO_CREATE_SCHEMA", "false")
