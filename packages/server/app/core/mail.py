"""
Outbound mail for invitations, sent over SMTP.

Delivery runs in a worker thread so the event loop is not blocked. Any
transport failure surfaces as MailError; callers decide how to report it.
"""

from __future__ import annotations

import asyncio
import smtplib
import ssl
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr

import structlog

from app.core.config import Settings

log = structlog.get_logger()


class MailError(Exception):
    """Raised when a message could not be handed to the SMTP server."""


def _render_admin_invite(invite_url: str, org_name: str) -> tuple[str, str, str]:
    subject = f"Join {org_name}"
    text_body = (
        f"You have been invited to join {org_name}.\n\n"
        f"Click the link below to create your account:\n{invite_url}\n\n"
        "If you do not wish to join, you can ignore this email."
    )
    html_body = f"""
    <div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif; max-width: 560px; margin: 0 auto; padding: 24px;">
        <p>You have been invited to join <b>{org_name}</b>.</p>
        <p style="text-align: center; margin: 32px 0;">
            <a href="{invite_url}" style="background: #175ddc; color: #ffffff; padding: 12px 24px; border-radius: 6px; text-decoration: none;">Join Organization Now</a>
        </p>
        <p style="color: #666; font-size: 12px;">If you do not wish to join, you can ignore this email.</p>
    </div>
    """
    return subject, text_body, html_body


def _deliver(msg: MIMEMultipart, to_email: str, settings: Settings) -> None:
    timeout = settings.smtp_timeout_seconds
    if settings.smtp_security == "force_tls":
        server = smtplib.SMTP_SSL(
            settings.smtp_host, settings.smtp_port, timeout=timeout,
            context=ssl.create_default_context(),
        )
    else:
        server = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=timeout)
    with server:
        if settings.smtp_security == "starttls":
            server.starttls(context=ssl.create_default_context())
        if settings.smtp_username and settings.smtp_password:
            server.login(settings.smtp_username, settings.smtp_password)
        server.sendmail(settings.smtp_from, [to_email], msg.as_string())


async def send_admin_invite(
    to_email: str, invite_url: str, org_name: str, settings: Settings
) -> None:
    """Send an administrative invitation carrying the onboarding link."""
    subject, text_body, html_body = _render_admin_invite(invite_url, org_name)

    msg = MIMEMultipart("alternative")
    msg["Subject"] = subject
    msg["From"] = formataddr((settings.smtp_from_name, settings.smtp_from))
    msg["To"] = to_email
    msg.attach(MIMEText(text_body, "plain"))
    msg.attach(MIMEText(html_body, "html"))

    try:
        await asyncio.to_thread(_deliver, msg, to_email, settings)
    except (smtplib.SMTPException, OSError) as exc:
        log.error("mail.send_failed", to=to_email, error=str(exc))
        raise MailError(f"Failed to send invitation to {to_email}") from exc

    log.info("mail.sent", to=to_email, kind="admin_invite")
