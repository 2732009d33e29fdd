"""Scheduled auto clock-out.

Runs ``AttendanceService.auto_close_open_sessions`` once a minute. The sweep
is idempotent, so a redundant or late tick is harmless.
"""

from __future__ import annotations

import logging
from typing import Optional

from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger

from ..core.exceptions import StoreUnavailable
from .service import AttendanceService

logger = logging.getLogger(__name__)

AUTO_CLOSE_JOB_ID = "attendance_auto_close"


def run_auto_close(service: AttendanceService) -> int:
    """One tick of the sweep; returns how many sessions were closed."""
    try:
        return len(service.auto_close_open_sessions())
    except StoreUnavailable as e:
        # Next tick retries.
        logger.warning("Auto clock-out skipped, store unavailable: %s", e)
        return 0


def build_scheduler(
    service: AttendanceService,
    *,
    scheduler: Optional[BackgroundScheduler] = None,
) -> BackgroundScheduler:
    scheduler = scheduler or BackgroundScheduler()
    scheduler.add_job(
        run_auto_close,
        CronTrigger(minute="*"),
        args=[service],
        id=AUTO_CLOSE_JOB_ID,
        replace_existing=True,
        max_instances=1,
        coalesce=True,
    )
    return scheduler


def start_scheduler(service: AttendanceService) -> BackgroundScheduler:
    scheduler = build_scheduler(service)
    scheduler.start()
    logger.info("Auto clock-out scheduler started (every minute)")
    return scheduler
