import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

# Remote task backend (all endpoints live under {API_URL}/api)
API_URL = os.getenv("API_URL", "http://localhost:3000").rstrip("/")
API_TIMEOUT_SECONDS = float(os.getenv("API_TIMEOUT_SECONDS", "30"))

# Redis, used to persist the last selected calendar date
REDIS_URL = os.getenv("REDIS_URL")
REDIS_HOST = os.getenv("REDIS_HOST", "localhost")
REDIS_PORT = int(os.getenv("REDIS_PORT", "6379"))
REDIS_PASSWORD = os.getenv("REDIS_PASSWORD")
REDIS_DB = int(os.getenv("REDIS_DB", "0"))
REDIS_SSL = os.getenv("REDIS_SSL", "false").lower() == "true"

# Calendar state
SELECTED_DATE_KEY = os.getenv("SELECTED_DATE_KEY", "@cleaner_app/selected_date")
# A persisted date older than this is ignored and the calendar opens on today
SELECTED_DATE_MAX_AGE_DAYS = int(os.getenv("SELECTED_DATE_MAX_AGE_DAYS", "30"))
CALENDAR_MIN_YEAR = int(os.getenv("CALENDAR_MIN_YEAR", "2025"))
CALENDAR_MAX_YEAR = int(os.getenv("CALENDAR_MAX_YEAR", "2026"))

# Cleaner sessions unused for this long are dropped with their cached tasks
SESSION_IDLE_TIMEOUT_SECONDS = float(os.getenv("SESSION_IDLE_TIMEOUT_SECONDS", str(8 * 60 * 60)))
