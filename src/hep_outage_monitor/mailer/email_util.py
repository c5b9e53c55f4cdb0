# mailer/email_util.py
import os
import smtplib
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from ..utils.my_logging import get_logger


def build_message(subject, body_text, from_email, recipients, body_html=None, attachment_path=None):
    msg = MIMEMultipart("mixed")
    msg['From'] = from_email
    msg['To'] = ", ".join(recipients)
    msg['Subject'] = subject

    alternative = MIMEMultipart("alternative")
    alternative.attach(MIMEText(body_text, 'plain', 'utf-8'))
    if body_html:
        alternative.attach(MIMEText(body_html, 'html', 'utf-8'))
    msg.attach(alternative)

    if attachment_path:
        with open(attachment_path, "rb") as f:
            part = MIMEBase('text', 'calendar')
            part.set_payload(f.read())
            encoders.encode_base64(part)
            part.add_header('Content-Disposition', f'attachment; filename="{os.path.basename(attachment_path)}"')
            msg.attach(part)
    return msg


def send_email(subject, body_text, smtp, recipients, body_html=None, attachment_path=None, logger=None):
    """Send one notification. Returns True on success; failures are logged, never raised."""
    logger = get_logger(logger)
    recipients = list(recipients or [])
    if not recipients:
        logger.error("No recipients configured. Set TO_EMAIL or recipients in config.yaml.")
        return False

    try:
        msg = build_message(subject, body_text, smtp.from_email, recipients,
                            body_html=body_html, attachment_path=attachment_path)
        with smtplib.SMTP(smtp.host, smtp.port, timeout=30) as server:
            server.starttls()
            server.login(smtp.username, smtp.password)
            server.sendmail(smtp.from_email, recipients, msg.as_string())
        logger.info(f"Email sent to {', '.join(recipients)}")
        return True
    except Exception as e:
        logger.error(f"Failed to send email: {e}")
        return False
