import os

STORAGE_BACKEND = "memory"
DATA_DIR = os.getenv("DATA_DIR", "data-test")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker_test"),
}

RECENT_ACTIVITY_LIMIT = 5

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
