# scraping/hep_parser.py
"""
Parser for the HEP ODS "bez struje" (planned outages) page.

The page has no stable table markup. Each outage is a small block of labelled
lines under a date heading, separated by <hr>:

    <h3>Ponedjeljak, 20.10.2026.</h3>
    <hr>
    <strong>Mjesto:</strong> Valentići
    <strong>Ulica:</strong> cijela naselja
    <strong>Očekivano trajanje:</strong><br>09:00 - 11:30
    <strong>Napomena:</strong> ...

All knowledge of that layout lives in this module.
"""
import logging
import re

from bs4 import BeautifulSoup

from ..models import OutageRecord
from ..utils.my_logging import get_logger

LOCATION_LABEL = "Mjesto:"
STREET_LABEL = "Ulica:"
TIME_LABEL = "Očekivano trajanje:"
NOTE_LABEL = "Napomena:"

# label -> OutageRecord field
LABELS = {
    LOCATION_LABEL: "location",
    STREET_LABEL: "street",
    TIME_LABEL: "time_range",
    NOTE_LABEL: "note",
}

BLOCK_TAGS = [
    "p", "div", "li", "tr", "td", "th", "dd", "dt", "hr",
    "h1", "h2", "h3", "h4", "h5", "h6",
    "ul", "ol", "table", "section", "article",
]
LINE_BREAK = "\u2029"

# a clock range such as "09:00 - 11:30"
TIME_LINE_RE = re.compile(r"\d\s*[-–—]\s*\d")


def norm_text(t):
    return " ".join(t.split())


def _soup(html):
    return BeautifulSoup(html or "", "lxml")


def _listing_root(soup):
    """The date heading and the closest container holding the outage entries."""
    fallback = soup.body or soup
    heading = soup.find("h3")
    if heading is None:
        return None, fallback
    for parent in heading.parents:
        if LOCATION_LABEL in parent.get_text(" "):
            return heading, parent
    return heading, fallback


def _block_lines(root):
    """
    One line per block element. Inline markup (<b>, <a>, <span>, <br>) stays
    inside its line, so "Istarska <b>ulica</b> 12-45" reads as one value.
    Modifies the tree in place.
    """
    for br in root.find_all("br"):
        br.replace_with(" ")
    for tag in root.find_all(BLOCK_TAGS):
        tag.insert_before(LINE_BREAK)
        tag.insert_after(LINE_BREAK)
    lines = (norm_text(t) for t in root.get_text().split(LINE_BREAK))
    return [t for t in lines if t]


def _split_label(line):
    for label, field in LABELS.items():
        if line.startswith(label):
            return field, norm_text(line[len(label):])
    return None, None


def _records_from_lines(lines, date_label):
    records = []
    current = None
    expect_time = False  # "Očekivano trajanje:" with the range on the next line

    for line in lines:
        field, value = _split_label(line)
        if field == "location":
            if current is not None:
                records.append(OutageRecord(**current))
            current = {"date_label": date_label, "location": value}
            expect_time = False
        elif field is not None:
            if current is None:
                # label before the first "Mjesto:", header noise
                continue
            current[field] = value
            expect_time = field == "time_range" and not value
        elif expect_time and current is not None and TIME_LINE_RE.search(line):
            current["time_range"] = line
            expect_time = False

    if current is not None:
        records.append(OutageRecord(**current))

    return [r for r in records if r.is_usable()]


def parse_outages(html, logger=None):
    """Extract outage records from one day's page. Never raises."""
    logger = get_logger(logger)
    try:
        soup = _soup(html)
        heading, root = _listing_root(soup)
        date_label = norm_text(heading.get_text(" ")) if heading is not None else ""
        return _records_from_lines(_block_lines(root), date_label)
    except Exception as e:
        logger.debug(f"Could not parse outage page ({type(e).__name__}: {e})")
        return []


def page_fingerprint(html):
    """Rough structural summary, logged per day to spot markup drift by hand."""
    html = html or ""
    soup = _soup(html)
    text = soup.get_text("\n")
    return {
        "length": len(html),
        "has_heading": soup.find("h3") is not None,
        "location_labels": text.count(LOCATION_LABEL),
    }


def log_fingerprint(day, html, count, logger=None):
    logger = get_logger(logger)
    fp = page_fingerprint(html)
    level = logging.WARNING if fp["location_labels"] and not count else logging.DEBUG
    logger.log(level, f"{day}: html={fp['length']}B heading={fp['has_heading']} "
                      f"labels={fp['location_labels']} parsed={count}")
