# codex_cms/application/notifications/email.py
"""
Form submission e-mails.

Messages go out over plain SMTP using the ``SMTP_*`` settings. Who receives
them and whether they are sent at all is controlled per tenant through site
settings. Delivery problems are logged and never surface to the submitter.
"""
import logging
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, formatdate, make_msgid
from typing import Any, Dict, Optional

from flask import current_app, render_template

from codex_cms.application.settings.site_settings import get_setting_value

logger = logging.getLogger(__name__)


def _enabled(tenant_id: str, key: str, default: bool) -> bool:
    value = get_setting_value(tenant_id, key, default)
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes", "on")
    return bool(value)


def build_message(
    *,
    sender: str,
    recipient: str,
    subject: str,
    text_body: str,
    html_body: Optional[str] = None,
    reply_to: Optional[str] = None,
) -> MIMEMultipart:
    message = MIMEMultipart("alternative")
    message["Subject"] = subject
    message["From"] = formataddr(("Codex CMS", sender))
    message["To"] = recipient
    message["Date"] = formatdate(localtime=False)
    message["Message-ID"] = make_msgid()
    if reply_to:
        message["Reply-To"] = reply_to

    message.attach(MIMEText(text_body, "plain", "utf-8"))
    if html_body:
        message.attach(MIMEText(html_body, "html", "utf-8"))
    return message


def send_message(message: MIMEMultipart) -> bool:
    config = current_app.config
    host = config.get("SMTP_HOST")
    if not host:
        logger.info("SMTP_HOST not configured; skipping e-mail to %s", message["To"])
        return False

    try:
        with smtplib.SMTP(host, config.get("SMTP_PORT", 587), timeout=config.get("SMTP_TIMEOUT", 10)) as smtp:
            if config.get("SMTP_USE_TLS", True):
                smtp.starttls(context=ssl.create_default_context())
            if config.get("SMTP_USERNAME"):
                smtp.login(config["SMTP_USERNAME"], config.get("SMTP_PASSWORD", ""))
            smtp.send_message(message)
    except (smtplib.SMTPException, OSError) as exc:
        logger.warning("Failed to send e-mail to %s: %s", message["To"], exc)
        return False

    logger.info("Sent e-mail '%s' to %s", message["Subject"], message["To"])
    return True


def notify_submission(tenant_id: str, submission, context: Dict[str, Any]) -> Dict[str, bool]:
    """
    Send the team notification and, when enabled, the auto-reply.
    Returns which messages were delivered.
    """
    result = {"notification": False, "auto_reply": False}
    sender = get_setting_value(tenant_id, "senderEmail") or current_app.config.get("SMTP_SENDER")
    if not sender:
        logger.info("No sender address configured; skipping notifications")
        return result

    recipient = get_setting_value(tenant_id, "notificationEmail")
    if recipient and _enabled(tenant_id, "enableEmailNotifications", True):
        message = build_message(
            sender=sender,
            recipient=recipient,
            subject=f"New {submission.form_type} submission from {submission.name}",
            text_body=render_template("emails/notification.txt", submission=submission, **context),
            html_body=render_template("emails/notification.html", submission=submission, **context),
            reply_to=submission.email,
        )
        result["notification"] = send_message(message)

    if _enabled(tenant_id, "enableAutoReply", False):
        subject = get_setting_value(tenant_id, "autoReplySubject") or "Thank you for contacting us"
        body = get_setting_value(tenant_id, "autoReplyMessage") or (
            "We have received your message and will get back to you shortly."
        )
        message = build_message(
            sender=sender,
            recipient=submission.email,
            subject=subject,
            text_body=render_template("emails/auto_reply.txt", submission=submission, body=body),
        )
        result["auto_reply"] = send_message(message)

    return result
