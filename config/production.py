import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "default")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
# Disable when an external cron calls POST /api/attendance/auto-close instead.
AUTO_CLOSE_ENABLED = bool(int(os.getenv("AUTO_CLOSE_ENABLED", "1")))
