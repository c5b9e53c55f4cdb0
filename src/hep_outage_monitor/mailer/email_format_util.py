# mailer/email_format_util.py
from html import escape


def format_subject(count, location_filter=None):
    subject = f"Power Outage Alert ({count})"
    if location_filter:
        subject += f" - {location_filter}"
    return subject


def format_outages_text(records, source_url):
    lines = [
        "PLANNED POWER OUTAGES IN YOUR AREA",
        "",
        f"Found {len(records)} scheduled outage(s):",
        "",
    ]
    for i, o in enumerate(records, 1):
        lines.append(f"--- OUTAGE {i} ---")
        lines.append(f"Date:     {o.date_label}")
        lines.append(f"Location: {o.location}")
        lines.append(f"Street:   {o.street}")
        lines.append(f"Time:     {o.time_range}")
        if o.note:
            lines.append(f"Note:     {o.note}")
        lines.append("")
    lines += [
        "---",
        "This is an automated notification from HEP Outage Monitor",
        f"Source: {source_url}",
    ]
    return "\n".join(lines) + "\n"


def format_outages_as_html(records):
    html = [
        "<h2>Planned Power Outages</h2>",
        '<table border="1" cellpadding="5" cellspacing="0">',
        "<thead><tr><th>Date</th><th>Location</th><th>Street</th><th>Time</th><th>Note</th></tr></thead><tbody>"
    ]
    for o in records:
        html.append(
            "<tr>"
            f"<td>{escape(o.date_label)}</td>"
            f"<td>{escape(o.location)}</td>"
            f"<td>{escape(o.street)}</td>"
            f"<td>{escape(o.time_range)}</td>"
            f"<td>{escape(o.note)}</td>"
            "</tr>"
        )
    html.append("</tbody></table>")
    return "".join(html)


def format_email_html(records, source_url):
    return (
        "<p>Dear User,</p>"
        "<p>Please find below the planned power outage details:</p>"
        f"{format_outages_as_html(records)}"
        "<br/>"
        f"<p>Source: <a href=\"{escape(source_url)}\">{escape(source_url)}</a></p>"
        "<p>Best regards,<br/>HEP Outage Monitor</p>"
    )
