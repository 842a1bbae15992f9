"""Root conftest — shared test configuration."""

import os

# Ensure tests never reach a real database or the real seed URL
os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)
os.environ.setdefault("SEED_URL", "http://seed.test/product_transaction.json")
os.environ.setdefault("LOAD_SNAPSHOT_ON_STARTUP", "false")
os.environ.setdefault("LOG_FORMAT", "text")
