# ics_generator/calendar_util.py
import re
import uuid
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event

from ..utils.my_logging import get_logger

# "09:00 - 11:30", "9.00-11.30", "08:00 – 12:00"
TIME_RANGE_RE = re.compile(r"(\d{1,2})[:.](\d{2})\s*[-–—]\s*(\d{1,2})[:.](\d{2})")


def parse_time_range(time_range):
    """Return ((h, m), (h, m)) or None when the text is not a clock range."""
    m = TIME_RANGE_RE.search(time_range or "")
    if not m:
        return None
    sh, sm, eh, em = (int(g) for g in m.groups())
    if sh > 23 or eh > 24 or sm > 59 or em > 59:
        return None
    return (sh, sm), (eh, em)


def create_event(record, tzname="Europe/Zagreb", logger=None):
    logger = get_logger(logger)
    parsed = parse_time_range(record.time_range)
    if record.source_date is None or parsed is None:
        logger.warning(f"Skipping calendar event with unparseable time: "
                       f"{record.location} {record.time_range!r}")
        return None

    tz = ZoneInfo(tzname)
    (sh, sm), (eh, em) = parsed
    day = record.source_date
    start = datetime(day.year, day.month, day.day, sh, sm, tzinfo=tz)
    end = datetime(day.year, day.month, day.day, 0, 0, tzinfo=tz) + timedelta(hours=eh, minutes=em)
    if end <= start:
        end += timedelta(days=1)

    place = ", ".join(p for p in (record.location, record.street) if p)
    description = record.note or ""
    return {
        'uid': str(uuid.uuid4()),
        'title': f"Power outage - {record.location or record.street}",
        'start': start,
        'end': end,
        'location': place,
        'description': description,
    }


def build_ics(events):
    cal = Calendar()
    cal.add('prodid', '-//HEP Outage Monitor//')
    cal.add('version', '2.0')
    cal.add('method', 'PUBLISH')

    for ev in events:
        e = Event()
        e.add('uid', ev.get("uid", str(uuid.uuid4())))
        e.add('summary', ev['title'])
        e.add('dtstart', ev['start'])
        e.add('dtend', ev['end'])
        e.add('location', ev.get('location', ''))
        e.add('description', ev.get('description', ''))
        cal.add_component(e)

    return cal.to_ical()


def save_ics_file(events, output_filename, logger=None):
    ics_data = build_ics(events)
    with open(output_filename, "wb") as f:
        f.write(ics_data)
    get_logger(logger).info(f"ICS file saved: {output_filename}")
    return output_filename
