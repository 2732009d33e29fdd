import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_tracker"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Used when no authenticated user id is in the session (single-user deployments).
DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "default")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Run the once-a-minute auto clock-out sweep inside the app process.
AUTO_CLOSE_ENABLED = bool(int(os.getenv("AUTO_CLOSE_ENABLED", "1")))
