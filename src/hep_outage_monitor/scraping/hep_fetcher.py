# scraping/hep_fetcher.py
from urllib.parse import urlencode

import requests

BASE_URL = "https://www.hep.hr/ods/bez-struje/19"
DATE_FORMAT = "%d.%m.%Y"

HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (compatible; HepOutageMonitor/1.0)"
}


class FetchError(Exception):
    """Network, timeout or HTTP status failure for one day's page."""

    def __init__(self, url, reason):
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason


def build_url(area_code, office_code, day, base_url=BASE_URL):
    query = urlencode({"dp": area_code, "el": office_code, "datum": day.strftime(DATE_FORMAT)})
    return f"{base_url}?{query}"


def source_url(area_code, office_code, base_url=BASE_URL):
    """Listing URL without a date, used in report footers."""
    return f"{base_url}?{urlencode({'dp': area_code, 'el': office_code})}"


def fetch(area_code, office_code, day, timeout=30, session=None):
    url = build_url(area_code, office_code, day)
    http = session or requests
    try:
        r = http.get(url, headers=HEADERS, timeout=timeout)
        r.raise_for_status()
        # no charset in the header means UTF-8
        if "charset" not in r.headers.get("Content-Type", "").lower():
            r.encoding = "utf-8"
        return r.text
    except requests.RequestException as e:
        raise FetchError(url, e) from e
