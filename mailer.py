"""
Marketing email over SMTP.

Broadcasts go out in batches with the recipients in BCC so no subscriber sees
another's address.
"""
import smtplib
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import List, Optional

from config import Config
from logger import get_logger

logger = get_logger(__name__)

DEFAULT_FROM_NAME = "Robusta Admin"


class MailerNotConfigured(Exception):
    pass


def _connect() -> smtplib.SMTP:
    if not Config.EMAIL_USER or not Config.EMAIL_PASS:
        raise MailerNotConfigured("EMAIL_USER / EMAIL_PASS are not configured")
    server = smtplib.SMTP(Config.SMTP_SERVER, Config.SMTP_PORT)
    try:
        server.starttls()
        server.login(Config.EMAIL_USER, Config.EMAIL_PASS)
    except OSError:
        server.close()
        raise
    return server


def _message(sender_email: str, subject: str, text: str, from_name: Optional[str]) -> MIMEText:
    msg = MIMEText(text, "plain", "utf-8")
    msg["Subject"] = subject
    msg["From"] = formataddr((from_name or DEFAULT_FROM_NAME, sender_email))
    return msg


def batched(items: List[str], size: int) -> List[List[str]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


def send_broadcast(recipients: List[str], sender_email: str, subject: str, text: str, from_name: Optional[str] = None) -> dict:
    if not recipients:
        raise ValueError("No recipients provided")

    batches = batched(recipients, Config.EMAIL_BATCH_SIZE)
    server = _connect()
    try:
        for batch in batches:
            msg = _message(sender_email, subject, text, from_name)
            # Bcc is passed as envelope recipients only, never as a header
            server.send_message(msg, from_addr=Config.EMAIL_USER, to_addrs=batch)
            logger.info("Email batch sent to %d recipients", len(batch))
    finally:
        server.quit()

    logger.info("Broadcast completed: %d recipients in %d batches", len(recipients), len(batches))
    return {"success": True, "recipientCount": len(recipients), "batches": len(batches)}


def send_single(recipient: str, sender_email: str, subject: str, text: str, from_name: Optional[str] = None) -> dict:
    msg = _message(sender_email, subject, text, from_name)
    msg["To"] = recipient
    server = _connect()
    try:
        server.send_message(msg, from_addr=Config.EMAIL_USER, to_addrs=[recipient])
    finally:
        server.quit()
    logger.info("Email sent to %s", recipient)
    return {"success": True, "recipient": recipient}
