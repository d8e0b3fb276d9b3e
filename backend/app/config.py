"""Application configuration."""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
DB_PATH = BASE_DIR / "data" / "fund_tracker.db"
DATABASE_URL = os.getenv("DATABASE_URL") or f"sqlite+aiosqlite:///{DB_PATH}"

# NAV source settings. With neither set, the built-in table is used.
NAV_DATA_FILE = os.getenv("NAV_DATA_FILE")  # path to a JSON NAV table
NAV_FEED_URL = os.getenv("NAV_FEED_URL")  # HTTP endpoint serving the same JSON
NAV_REFRESH_INTERVAL = int(os.getenv("NAV_REFRESH_INTERVAL", "900"))  # seconds

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Ensure data directory exists (only needed for local SQLite, skip if DATABASE_URL is overridden)
if not os.getenv("DATABASE_URL"):
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
