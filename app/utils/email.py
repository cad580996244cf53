import base64
import logging
from typing import List, Optional

import resend

from app.core.config import settings

logger = logging.getLogger(__name__)


def send_email(to: str, subject: str, html_content: str, attachments: Optional[List[dict]] = None) -> None:
    """Sends an email using the Resend service."""
    if not settings.RESEND_API_KEY or not settings.RESEND_API_KEY.get_secret_value():
        logger.error("RESEND_API_KEY is not configured or is empty. Cannot send email.")
        return

    try:
        resend.api_key = settings.RESEND_API_KEY.get_secret_value()
        params = {
            "from": settings.EMAIL_FROM_ADDRESS,
            "to": [to],
            "subject": subject,
            "html": html_content,
        }
        if attachments:
            params["attachments"] = attachments
        logger.info(f"Sending email to {to} with subject '{subject}'")
        email = resend.Emails.send(params)
        logger.info(f"Email sent successfully to {to}. Message ID: {email['id']}")
    except Exception as e:
        logger.error(f"Failed to send email to {to}. Error: {e}")
        raise


def png_attachment(filename: str, content: bytes) -> dict:
    return {"filename": filename, "content": base64.b64encode(content).decode("ascii")}


def send_welcome_email(to_email: str, name: str) -> None:
    """Best effort: a failure is logged and never reaches the caller."""
    subject = "Welcome to Cohort"
    html_content = f"""
    <p>Hi {name},</p>
    <p>Your Cohort account is ready. You can sign in at <a href="{settings.FRONTEND_URL}">{settings.FRONTEND_URL}</a>
    to browse workspaces, manage your bookings and join the community feed.</p>
    <p>Welcome aboard!<br>The Cohort Team</p>
    """
    try:
        send_email(to=to_email, subject=subject, html_content=html_content)
    except Exception:
        logger.error(f"Failed to send welcome email to {to_email}.", exc_info=True)


def send_day_pass_email(
    to_email: str, name: str, pass_code: str, visit_date: str, qr_png: Optional[bytes] = None
) -> None:
    """Best effort: a failure is logged and never reaches the caller."""
    subject = f"Your Cohort Day Pass: {pass_code}"
    html_content = f"""
    <p>Hi {name},</p>
    <p>Your day pass for <strong>{visit_date}</strong> is confirmed.</p>
    <p>Pass code: <strong>{pass_code}</strong></p>
    <p>Show the attached QR code at the front desk when you arrive.</p>
    <p>See you soon,<br>The Cohort Team</p>
    """
    attachments = [png_attachment(f"{pass_code}.png", qr_png)] if qr_png else None
    try:
        send_email(to=to_email, subject=subject, html_content=html_content, attachments=attachments)
    except Exception:
        logger.error(f"Failed to send day pass email to {to_email}.", exc_info=True)
