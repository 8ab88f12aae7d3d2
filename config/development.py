import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "farm_payroll"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

DEFAULT_FARM_ID = int(os.getenv("DEFAULT_FARM_ID", "1"))

# Add overtime pay (per-day rate / 8 per hour) into net salary.
OVERTIME_PAY_ENABLED = bool(int(os.getenv("OVERTIME_PAY_ENABLED", "0")))

WORKER_CACHE_TTL_SECONDS = int(os.getenv("WORKER_CACHE_TTL_SECONDS", "60"))
WORKER_CACHE_MAX_ENTRIES = int(os.getenv("WORKER_CACHE_MAX_ENTRIES", "100"))
