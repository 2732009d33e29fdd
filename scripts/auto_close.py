"""Run one auto clock-out sweep, for hosts that schedule it with cron instead of the app process."""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_tracker.attendance_tracker.attendance.scheduler import run_auto_close
from src.attendance_tracker.attendance_tracker.container import build_container
from src.attendance_tracker.attendance_tracker.main import configure_logging


def main() -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG))
    count = run_auto_close(container.attendance_service)
    logging.getLogger("auto_close").info("Auto clock-out completed. %d records updated.", count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
