# reporter.py
from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from datetime import datetime

from .config import MonitorConfig
from .ics_generator.calendar_util import create_event, save_ics_file
from .mailer.email_format_util import format_email_html, format_outages_text, format_subject
from .mailer.email_util import send_email
from .scraping.hep_fetcher import source_url
from .utils.my_logging import get_logger

DRY_RUN_BANNER = "=== DRY RUN - POWER OUTAGE DATA (NO EMAIL SENT) ==="


@dataclass(frozen=True)
class ReportOutcome:
    matched: int
    sent: bool
    dry_run: bool


def _write_ics(records, config, directory, logger):
    events = [ev for ev in (create_event(r, config.timezone, logger=logger) for r in records) if ev]
    if not events:
        return None
    path = os.path.join(directory, f"hep_outages_{datetime.now():%Y%m%d}.ics")
    return save_ics_file(events, path, logger=logger)


def report(records, config: MonitorConfig, send=send_email, out=None, logger=None) -> ReportOutcome:
    """Print or email the outages. `send` is called at most once, and only for a non-empty list."""
    logger = get_logger(logger)
    out = out or sys.stdout

    if not records:
        if config.location_filter:
            logger.info("No matching outages found. No email sent.")
        else:
            logger.info(f"No outages found in the next {config.window_days} days. No email sent.")
        if config.dry_run:
            print(DRY_RUN_BANNER, file=out)
            print("No matching outages.", file=out)
        return ReportOutcome(matched=0, sent=False, dry_run=config.dry_run)

    url = source_url(config.area_code, config.office_code)
    body = format_outages_text(records, url)

    if config.dry_run:
        print(DRY_RUN_BANNER, file=out)
        print(body, file=out)
        return ReportOutcome(matched=len(records), sent=False, dry_run=True)

    subject = format_subject(len(records), config.location_filter)
    logger.info(f"Sending email notification ({len(records)} outage(s))...")

    with tempfile.TemporaryDirectory(prefix="hep-outages-") as tmp:
        ics_path = _write_ics(records, config, tmp, logger) if config.attach_ics else None
        sent = send(
            subject,
            body,
            smtp=config.smtp,
            recipients=config.recipients,
            body_html=format_email_html(records, url),
            attachment_path=ics_path,
            logger=logger,
        )

    if not sent:
        logger.error("Notification was not delivered")
    return ReportOutcome(matched=len(records), sent=bool(sent), dry_run=False)
