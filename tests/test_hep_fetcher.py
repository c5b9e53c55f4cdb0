"""Tests for the HEP page fetcher."""

from datetime import date
from unittest.mock import Mock, patch

import pytest
import requests

from hep_outage_monitor.scraping.hep_fetcher import FetchError, build_url, fetch, source_url
from hep_outage_monitor.scraping.hep_parser import parse_outages


class TestBuildUrl:
    def test_formats_date_dotted(self):
        url = build_url("4", "29", date(2026, 10, 5))

        assert url == "https://www.hep.hr/ods/bez-struje/19?dp=4&el=29&datum=05.10.2026"

    def test_source_url_has_no_date(self):
        assert source_url("4", "29") == "https://www.hep.hr/ods/bez-struje/19?dp=4&el=29"


class TestFetch:

    @patch("hep_outage_monitor.scraping.hep_fetcher.requests.get")
    def test_returns_page_text(self, mock_get):
        mock_get.return_value = Mock(text="<html>ok</html>", headers={"Content-Type": "text/html; charset=utf-8"})

        assert fetch("4", "29", date(2026, 10, 19), timeout=5) == "<html>ok</html>"
        args, kwargs = mock_get.call_args
        assert args[0].endswith("datum=19.10.2026")
        assert kwargs["timeout"] == 5
        assert "User-Agent" in kwargs["headers"]

    @patch("hep_outage_monitor.scraping.hep_fetcher.requests.get")
    def test_timeout_becomes_fetch_error(self, mock_get):
        mock_get.side_effect = requests.Timeout("read timed out")

        with pytest.raises(FetchError) as exc:
            fetch("4", "29", date(2026, 10, 19))

        assert "datum=19.10.2026" in exc.value.url

    @patch("hep_outage_monitor.scraping.hep_fetcher.requests.get")
    def test_http_status_becomes_fetch_error(self, mock_get):
        response = Mock()
        response.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
        mock_get.return_value = response

        with pytest.raises(FetchError):
            fetch("4", "29", date(2026, 10, 19))

    def test_uses_given_session(self):
        session = Mock()
        session.get.return_value = Mock(text="page", headers={"Content-Type": "text/html; charset=utf-8"})

        assert fetch("4", "29", date(2026, 10, 19), session=session) == "page"
        session.get.assert_called_once()


def make_response(body, content_type):
    response = requests.Response()
    response.status_code = 200
    response._content = body
    response.headers["Content-Type"] = content_type
    return response


class TestFetchEncoding:

    PAGE = "<div><h3>Utorak</h3><p>Mjesto: Valentići</p><p>Očekivano trajanje: 09:00 - 11:30</p></div>"

    @patch("hep_outage_monitor.scraping.hep_fetcher.requests.get")
    def test_missing_charset_decodes_as_utf8(self, mock_get):
        mock_get.return_value = make_response(self.PAGE.encode("utf-8"), "text/html")

        records = parse_outages(fetch("4", "29", date(2026, 10, 19)))

        assert records[0].location == "Valentići"
        assert records[0].time_range == "09:00 - 11:30"

    @patch("hep_outage_monitor.scraping.hep_fetcher.requests.get")
    def test_declared_charset_is_respected(self, mock_get):
        mock_get.return_value = make_response(self.PAGE.encode("cp1250"), "text/html; charset=windows-1250")

        assert "Valentići" in fetch("4", "29", date(2026, 10, 19))
