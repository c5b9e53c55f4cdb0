# cli.py
import argparse
import logging
import sys

from dotenv import load_dotenv

from . import APP_NAME
from .app import run_check
from .config import DEFAULT_CONFIG_PATH, ConfigError, load_monitor_config
from .runner import serve
from .utils.my_logging import setup_logging


def build_parser():
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Check HEP planned power outages and send notifications",
    )
    parser.add_argument("--dry-run", action="store_true",
                        help="Print outage data to console instead of sending email")
    parser.add_argument("--filter", "-f", dest="location_filter", default=None,
                        help="Filter outages by location or street (partial match). Shows all if not provided")
    parser.add_argument("--days", type=int, dest="window_days", default=None,
                        help="Look-ahead days after today (default 7)")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH,
                        help="Path to config.yaml (optional)")
    parser.add_argument("--schedule", action="store_true",
                        help="Keep running and check on the configured cron schedule")
    parser.add_argument("--log-dir", default="~/projects", help="Base directory for log files")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    load_dotenv()
    logger = setup_logging(APP_NAME, base_dir=args.log_dir, level=getattr(logging, args.log_level))

    try:
        config = load_monitor_config(
            args.config,
            dry_run=args.dry_run or None,
            location_filter=args.location_filter,
            window_days=args.window_days,
        )
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    if args.schedule:
        try:
            serve(config, logger=logger)
        except ConfigError as e:
            logger.error(f"Configuration error: {e}")
            return 2
        return 0

    run_check(config, logger=logger)
    return 0


if __name__ == "__main__":
    sys.exit(main())
