"""End-to-end run with fake fetch and send."""

import io
from dataclasses import replace
from datetime import date
from unittest.mock import Mock

from hep_outage_monitor.app import run_check
from hep_outage_monitor.scraping.hep_fetcher import FetchError

TODAY = date(2026, 10, 19)


class TestRunCheck:

    def test_sends_filtered_outages(self, config, page):
        pages = {
            date(2026, 10, 20): page("hep_two_outages.html"),
            date(2026, 10, 21): page("hep_inline_labels.html"),
        }

        def fetch(area_code, office_code, day, timeout=30):
            return pages.get(day, page("hep_no_outages.html"))

        send = Mock(return_value=True)

        outcome = run_check(replace(config, location_filter="istarska"), today=TODAY,
                            fetch=fetch, send=send)

        assert send.call_count == 1
        body = send.call_args.args[1]
        assert "Found 1 scheduled outage(s):" in body
        assert "Istarska ulica 12-45" in body
        assert "Location: Pula" not in body
        assert outcome.matched == 1
        assert outcome.sent is True

    def test_no_matches_no_send(self, config, page):
        send = Mock()

        outcome = run_check(replace(config, location_filter="Zagreb"), today=TODAY,
                            fetch=lambda *a, **k: page("hep_two_outages.html"), send=send)

        send.assert_not_called()
        assert outcome.matched == 0

    def test_total_fetch_failure_is_quiet(self, config):
        def fetch(area_code, office_code, day, timeout=30):
            raise FetchError("https://www.hep.hr", "network unreachable")

        send = Mock()

        outcome = run_check(config, today=TODAY, fetch=fetch, send=send)

        send.assert_not_called()
        assert outcome.matched == 0
        assert outcome.sent is False

    def test_dry_run_prints_body(self, config, page):
        send = Mock()
        out = io.StringIO()

        outcome = run_check(replace(config, dry_run=True, window_days=0), today=TODAY,
                            fetch=lambda *a, **k: page("hep_two_outages.html"), send=send, out=out)

        send.assert_not_called()
        assert "Found 2 scheduled outage(s):" in out.getvalue()
        assert outcome.dry_run is True
