# =============================================================================
# core/services/email_service.py - Contact Form Mailer
# =============================================================================
# Validates a contact submission and relays it over SMTP to the site owner.
# The visitor's address goes in Reply-To so replies reach them directly.
#
# send() never raises: validation problems and transport failures both come
# back as an EmailResult the route can return verbatim.
# =============================================================================

import html
import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid
from typing import Any

import aiosmtplib
from pydantic import ValidationError as PydanticValidationError

from app.config import Settings
from app.constants import MESSAGES
from core.models.contact import ContactFormData, EmailResult

logger = logging.getLogger(__name__)


def render_contact_html(form: ContactFormData) -> str:
    """HTML body for a submission. Every visitor-supplied value is escaped."""
    name = html.escape(form.name)
    email = html.escape(form.email)
    message = html.escape(form.message)

    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h2 style="color: #8b5cf6; margin-bottom: 20px;">New Contact Form Submission</h2>

  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px; margin-bottom: 20px;">
    <h3 style="margin-top: 0; color: #333;">Contact Details</h3>
    <p><strong>Name:</strong> {name}</p>
    <p><strong>Email:</strong> {email}</p>
  </div>

  <div style="background-color: #f8f9fa; padding: 20px; border-radius: 8px;">
    <h3 style="margin-top: 0; color: #333;">Message</h3>
    <p style="line-height: 1.6; white-space: pre-wrap;">{message}</p>
  </div>

  <div style="margin-top: 20px; padding-top: 20px; border-top: 1px solid #e0e0e0;">
    <p style="color: #666; font-size: 14px;">
      This email was sent from the contact form on sumit.codes
    </p>
  </div>
</div>
"""


def render_contact_text(form: ContactFormData) -> str:
    return (
        "New Contact Form Submission\n\n"
        f"Name: {form.name}\n"
        f"Email: {form.email}\n\n"
        f"{form.message}\n"
    )


class EmailService:
    """
    Sends contact form submissions.

    Example:
        service = EmailService(settings)
        result = await service.send({"name": "Jo", "email": "jo@x.io", "message": "Hello there!"})
        if not result.success:
            print(result.message)
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    @property
    def sender(self) -> str:
        return self._settings.SMTP_FROM or self._settings.SMTP_USER or self._settings.CONTACT_RECIPIENT

    def build_message(self, form: ContactFormData) -> MIMEMultipart:
        msg = MIMEMultipart("alternative")
        msg["From"] = self.sender
        msg["To"] = self._settings.CONTACT_RECIPIENT
        msg["Subject"] = f"Contact Form: Message from {form.name}"
        msg["Reply-To"] = form.email
        msg["Date"] = formatdate(localtime=False)
        msg["Message-ID"] = make_msgid()

        msg.attach(MIMEText(render_contact_text(form), "plain", "utf-8"))
        msg.attach(MIMEText(render_contact_html(form), "html", "utf-8"))
        return msg

    async def _deliver(self, msg: MIMEMultipart) -> None:
        port = self._settings.SMTP_PORT
        credentials = {}
        if self._settings.SMTP_USER and self._settings.SMTP_PASS:
            credentials = {
                "username": self._settings.SMTP_USER,
                "password": self._settings.SMTP_PASS,
            }

        await aiosmtplib.send(
            msg,
            hostname=self._settings.SMTP_HOST,
            port=port,
            timeout=self._settings.SMTP_TIMEOUT_SECONDS,
            use_tls=port == 465,  # Implicit TLS for port 465
            start_tls=True if port == 587 else None,
            **credentials,
        )

    async def send(self, payload: Any) -> EmailResult:
        """
        Validate and send a contact submission.

        Args:
            payload: Raw request body (dict expected)

        Returns:
            EmailResult with failure="validation" when a rule fails (nothing
            is sent), failure="delivery" when SMTP fails, or success
        """
        try:
            form = ContactFormData.model_validate(payload)
        except PydanticValidationError as e:
            first = e.errors()[0]
            logger.info(f"Contact form rejected: {first.get('type')}")
            return EmailResult(success=False, message=first["msg"], failure="validation")

        try:
            await self._deliver(self.build_message(form))
        except Exception as e:
            logger.error(f"Error sending contact email: {type(e).__name__}: {e}")
            return EmailResult(success=False, message=MESSAGES.EMAIL_FAILED, failure="delivery")

        logger.info("Contact email sent")
        return EmailResult(success=True, message=MESSAGES.EMAIL_SENT)
