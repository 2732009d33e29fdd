import os

_ENVIRONMENTS = {
    "dev": "config.development",
    "development": "config.development",
    "test": "config.testing",
    "testing": "config.testing",
    "prod": "config.production",
    "production": "config.production",
}


def get_settings_module() -> str:
    """Settings module for this process.

    ``ATTENDANCE_SETTINGS_MODULE`` names a module outright (e.g. a host-specific
    ``config.staging``); otherwise ``APP_ENV`` picks one, defaulting to development.
    """
    explicit = os.getenv("ATTENDANCE_SETTINGS_MODULE", "").strip()
    if explicit:
        return explicit

    env = os.getenv("APP_ENV", "development").strip().lower()
    return _ENVIRONMENTS.get(env, "config.development")
