# models.py
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class OutageRecord:
    """One planned outage announcement as published on the HEP page."""

    date_label: str = ""
    location: str = ""
    street: str = ""
    time_range: str = ""
    note: str = ""
    # calendar day the page was fetched for, not parsed from the HTML
    source_date: Optional[date] = None

    def with_source_date(self, day: date) -> "OutageRecord":
        return replace(self, source_date=day)

    def is_usable(self) -> bool:
        return bool(self.location or self.street)
