"""Example: drive the session engine through the service layer (no Flask).

Controllers are a thin layer; attendance rules live in AttendanceService.
"""

import importlib

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    service = container.attendance_service

    result = service.clock_in("demo")
    print("clock_in:", "applied" if result.applied else result.reason.value, result.phase.value)
    print(service.dashboard("demo"))


if __name__ == "__main__":
    main()
