from pathlib import Path

import pytest

from hep_outage_monitor.config import MonitorConfig, SmtpSettings

DATA_DIR = Path(__file__).parent / "data"

ENV_KEYS = [
    "HEP_CITY", "HEP_OFFICE", "HEP_FILTER", "HEP_WINDOW_DAYS",
    "TO_EMAIL", "FROM_EMAIL", "SMTP_USERNAME", "SMTP_PASSWORD", "SMTP_SERVER", "SMTP_PORT",
]


def load_page(name):
    return (DATA_DIR / name).read_text(encoding="utf-8")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's real settings out of the tests."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def two_outages_html():
    return load_page("hep_two_outages.html")


@pytest.fixture
def config():
    return MonitorConfig(
        area_code="4",
        office_code="29",
        window_days=7,
        request_delay=0,
        recipients=("ops@example.com",),
        smtp=SmtpSettings(username="u", password="p", from_email="monitor@example.com"),
    )


@pytest.fixture
def page():
    return load_page
