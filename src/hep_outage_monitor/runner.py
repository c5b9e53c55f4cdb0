# runner.py
from __future__ import annotations

import signal
import sys
import time
from datetime import datetime
from zoneinfo import ZoneInfo

from apscheduler.schedulers.blocking import BlockingScheduler
from apscheduler.triggers.cron import CronTrigger

from .app import run_check
from .config import ConfigError, MonitorConfig
from .utils.my_logging import get_logger


def human_dur(seconds: float) -> str:
    s = int(seconds)
    h, rem = divmod(s, 3600)
    m, s = divmod(rem, 60)
    if h: return f"{h}h {m}m {s}s"
    if m: return f"{m}m {s}s"
    return f"{s}s"


def run_job(config: MonitorConfig, logger=None):
    """Scheduled entry: one failed run must not take the scheduler down."""
    logger = get_logger(logger)
    t0 = time.time()
    try:
        outcome = run_check(config, logger=logger)
    except Exception as e:
        logger.exception(f"Scheduled run failed after {human_dur(time.time() - t0)}: {e}")
        return None
    logger.info(f"Scheduled run finished in {human_dur(time.time() - t0)}")
    return outcome


def build_scheduler(config: MonitorConfig, logger=None) -> BlockingScheduler:
    logger = get_logger(logger)
    tz = ZoneInfo(config.timezone)
    try:
        trigger = CronTrigger.from_crontab(config.schedule, timezone=tz)
    except ValueError as e:
        raise ConfigError(f"invalid cron '{config.schedule}': {e}") from e

    scheduler = BlockingScheduler(timezone=tz)
    scheduler.add_job(
        run_job,
        trigger=trigger,
        id="hep_outage_check",
        kwargs={"config": config, "logger": logger},
        max_instances=1,
        coalesce=True,
        misfire_grace_time=60*30,
        replace_existing=True,
    )
    next_fire = trigger.get_next_fire_time(None, datetime.now(tz))
    logger.info(f"Scheduled '{config.schedule}' ({config.timezone}), next={next_fire}")
    return scheduler


def serve(config: MonitorConfig, logger=None):
    logger = get_logger(logger)
    scheduler = build_scheduler(config, logger=logger)

    def _shutdown(signum, frame):
        logger.info("Shutting down scheduler...")
        scheduler.shutdown(wait=False)
        sys.exit(0)

    signal.signal(signal.SIGTERM, _shutdown)
    logger.info("Scheduler started. Press Ctrl+C to exit.")
    try:
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("Scheduler stopped")
