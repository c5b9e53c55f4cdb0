# scraping/outage_window.py
from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterator, Optional
from zoneinfo import ZoneInfo

from ..config import MonitorConfig
from ..models import OutageRecord
from ..utils.my_logging import get_logger
from .hep_fetcher import FetchError, build_url, fetch as fetch_page
from .hep_parser import log_fingerprint, parse_outages


@dataclass
class DayResult:
    day: date
    url: str
    records: list = field(default_factory=list)
    error: Optional[FetchError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def today_in(tzname: str) -> date:
    return datetime.now(ZoneInfo(tzname)).date()


def window_dates(today: date, window_days: int) -> list[date]:
    """today .. today+window_days, both ends included."""
    return [today + timedelta(days=d) for d in range(window_days + 1)]


def iter_days(config: MonitorConfig, today=None, fetch=fetch_page, parse=parse_outages,
              sleep=time.sleep, logger=None) -> Iterator[DayResult]:
    """Fetch and parse one page per day of the look-ahead window, in date order."""
    logger = get_logger(logger)
    today = today or today_in(config.timezone)
    days = window_dates(today, config.window_days)

    for i, day in enumerate(days):
        url = build_url(config.area_code, config.office_code, day)
        logger.info(f"Checking {day:%d.%m.%Y}: {url}")
        try:
            html = fetch(config.area_code, config.office_code, day, timeout=config.request_timeout)
        except FetchError as e:
            logger.error(f"Error fetching page for {day:%d.%m.%Y}: {e.reason}")
            yield DayResult(day=day, url=url, error=e)
        else:
            records = [r.with_source_date(day) for r in parse(html)]
            log_fingerprint(day, html, len(records), logger=logger)
            yield DayResult(day=day, url=url, records=records)

        if config.request_delay and i < len(days) - 1:
            sleep(config.request_delay)


def collect_outages(config: MonitorConfig, today=None, fetch=fetch_page, parse=parse_outages,
                    sleep=time.sleep, logger=None) -> list[OutageRecord]:
    logger = get_logger(logger)
    outages: list[OutageRecord] = []
    failed = 0

    for result in iter_days(config, today=today, fetch=fetch, parse=parse, sleep=sleep, logger=logger):
        if not result.ok:
            failed += 1
            continue
        if result.records:
            logger.info(f"Found {len(result.records)} outage(s) on {result.day:%d.%m.%Y}")
            for o in result.records:
                logger.info(f"  - {o.location}: {o.time_range}")
        else:
            logger.info(f"No outages scheduled on {result.day:%d.%m.%Y}")
        outages.extend(result.records)

    total = config.window_days + 1
    if failed:
        logger.warning(f"{failed} of {total} day(s) could not be fetched; results are partial")
    logger.info(f"Collected {len(outages)} outage(s) over {total} day(s)")
    return outages
