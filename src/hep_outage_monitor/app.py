# app.py
from .config import MonitorConfig
from .filters.location_filter import filter_outages
from .mailer.email_util import send_email
from .reporter import ReportOutcome, report
from .scraping.hep_fetcher import fetch as fetch_page
from .scraping.outage_window import collect_outages
from .utils.my_logging import get_logger


def run_check(config: MonitorConfig, today=None, fetch=fetch_page, send=send_email,
              sleep=None, out=None, logger=None) -> ReportOutcome:
    """One full check: collect the window, filter, report."""
    logger = get_logger(logger)
    logger.info(f"HEP Outage Monitor starting (area={config.area_code}, office={config.office_code}, "
                f"days=0..{config.window_days})")
    if config.dry_run:
        logger.info("Mode: DRY RUN (no email will be sent)")
    else:
        logger.info(f"Will notify: {', '.join(config.recipients)}")

    kwargs = {"sleep": sleep} if sleep is not None else {}
    outages = collect_outages(config, today=today, fetch=fetch, logger=logger, **kwargs)

    matched = filter_outages(outages, config.location_filter)
    if config.location_filter:
        logger.info(f"Filter applied: '{config.location_filter}' - "
                    f"{len(matched)} of {len(outages)} outage(s) match")

    outcome = report(matched, config, send=send, out=out, logger=logger)
    logger.info(f"Run complete: matched={outcome.matched} sent={outcome.sent} dry_run={outcome.dry_run}")
    return outcome
