import os

STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file")
DATA_DIR = os.getenv("DATA_DIR", "/var/lib/attendance-tracker")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

RECENT_ACTIVITY_LIMIT = int(os.getenv("RECENT_ACTIVITY_LIMIT", "5"))

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
