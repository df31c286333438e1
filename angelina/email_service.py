"""
Email Service using SMTP (primary) or Resend (fallback)
Templates are MJML, compiled to HTML before sending
"""

import asyncio
import logging
import smtplib
import ssl
from datetime import datetime
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Union

import resend
from fastapi import Request
from mjml import mjml_to_html

from . import config
from .email_templates import (
    STATUS_MESSAGES,
    admin_notification_template,
    client_confirmation_template,
    contact_message_template,
    newsletter_welcome_template,
    status_update_template,
)
from .shared.errors import NotificationError

logger = logging.getLogger(__name__)


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML template to production-ready HTML"""
    try:
        result = mjml_to_html(mjml_content)
        if result.errors:
            logger.warning(f"MJML compilation warnings: {result.errors}")
        return result.html
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise NotificationError("Failed to compile email template") from e


class EmailSender:
    """
    Outbound mail client.

    Built once at startup and handed to the services through a dependency.
    Every send either succeeds or raises NotificationError; deciding whether a
    failure matters is left to the caller.
    """

    def __init__(
        self,
        smtp_host: Optional[str] = None,
        smtp_port: int = 587,
        smtp_username: Optional[str] = None,
        smtp_password: Optional[str] = None,
        resend_api_key: Optional[str] = None,
        from_address: str = config.EMAIL_FROM_ADDRESS,
        admin_email: str = config.ADMIN_EMAIL,
        timeout: int = 30,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_username = smtp_username
        self.smtp_password = smtp_password
        self.resend_api_key = resend_api_key
        self.from_address = from_address
        self.admin_email = admin_email
        self.timeout = timeout

    @classmethod
    def from_config(cls) -> "EmailSender":
        return cls(
            smtp_host=config.SMTP_HOST,
            smtp_port=config.SMTP_PORT,
            smtp_username=config.EMAIL_USER or None,
            smtp_password=config.EMAIL_PASS or None,
            resend_api_key=config.RESEND_API_KEY,
            from_address=config.EMAIL_FROM_ADDRESS,
            admin_email=config.ADMIN_EMAIL,
        )

    @property
    def smtp_configured(self) -> bool:
        return bool(self.smtp_host and self.smtp_username and self.smtp_password)

    def _send_via_smtp(self, recipients: list[str], subject: str, html_content: str) -> dict:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_address
        msg["To"] = ", ".join(recipients)
        msg.attach(MIMEText(html_content, "html"))

        context = ssl.create_default_context()
        if self.smtp_port == 465:
            server = smtplib.SMTP_SSL(
                self.smtp_host, self.smtp_port, context=context, timeout=self.timeout
            )
        else:
            server = smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout)
            server.starttls(context=context)

        try:
            server.login(self.smtp_username, self.smtp_password)
            server.sendmail(
                self.from_address.split("<")[-1].rstrip(">"), recipients, msg.as_string()
            )
        finally:
            server.quit()

        logger.info(f"✅ SMTP email sent successfully via {self.smtp_host}")
        return {"id": f"smtp-{datetime.utcnow().timestamp()}", "success": True}

    def _send_via_resend(self, recipients: list[str], subject: str, html_content: str) -> dict:
        resend.api_key = self.resend_api_key
        response = resend.Emails.send(
            {
                "from": self.from_address,
                "to": recipients,
                "subject": subject,
                "html": html_content,
            }
        )
        logger.info(f"✅ Email sent successfully via Resend: {response}")
        return response

    async def send_email(self, to: Union[str, list[str]], subject: str, mjml_content: str) -> dict:
        """
        Send an email using SMTP (if configured) or Resend (fallback)

        Args:
            to: Recipient email(s)
            subject: Email subject line
            mjml_content: MJML template content (will be compiled to HTML)

        Returns:
            Send response dict

        Raises:
            NotificationError: when no transport is configured or every transport fails
        """
        html_content = compile_mjml_to_html(mjml_content)
        recipients = [to] if isinstance(to, str) else to

        if self.smtp_configured:
            try:
                logger.info(f"📧 Sending email via SMTP: {self.smtp_host}")
                return await asyncio.to_thread(
                    self._send_via_smtp, recipients, subject, html_content
                )
            except Exception as e:
                if not self.resend_api_key:
                    logger.error(f"❌ SMTP send failed to {recipients}: {e}")
                    raise NotificationError(f"Failed to send email: {subject}") from e
                logger.warning(f"⚠️ SMTP failed, falling back to Resend: {e}")

        if not self.resend_api_key:
            logger.error("❌ No email service configured - SMTP credentials and RESEND_API_KEY missing")
            raise NotificationError("Email service not configured")

        try:
            logger.info(f"📧 Sending email via Resend to: {recipients}")
            return await asyncio.to_thread(self._send_via_resend, recipients, subject, html_content)
        except Exception as e:
            logger.error(f"❌ Email send error to {recipients}: {e}")
            raise NotificationError(f"Failed to send email: {subject}") from e

    # ============================================
    # Transactional messages
    # ============================================

    async def send_client_confirmation(
        self,
        to: str,
        first_name: str,
        surname: str,
        appointment_id: int,
        work_type: str,
        ranking: str,
    ) -> dict:
        """Confirm receipt of an appointment request to the client"""
        mjml_content = client_confirmation_template(
            first_name=first_name,
            surname=surname,
            appointment_id=appointment_id,
            work_type=work_type,
            ranking=ranking,
        )
        return await self.send_email(
            to=to,
            subject=f"Appointment Request Received - {config.BUSINESS_NAME}",
            mjml_content=mjml_content,
        )

    async def send_admin_notification(
        self,
        appointment_id: int,
        first_name: str,
        surname: str,
        email: str,
        phone: str,
        work_type: str,
        ranking: str,
        description: str,
    ) -> dict:
        """Alert the administrator about a new appointment request"""
        mjml_content = admin_notification_template(
            appointment_id=appointment_id,
            first_name=first_name,
            surname=surname,
            email=email,
            phone=phone,
            work_type=work_type,
            ranking=ranking,
            description=description,
        )
        return await self.send_email(
            to=self.admin_email,
            subject=f"New Appointment Request #{appointment_id}",
            mjml_content=mjml_content,
        )

    async def send_status_update(
        self, to: str, first_name: str, appointment_id: int, status: str
    ) -> Optional[dict]:
        """Tell the client their appointment moved to accepted, rejected or completed.

        Other statuses have no client-facing message and send nothing.
        """
        if status not in STATUS_MESSAGES:
            return None

        mjml_content = status_update_template(
            first_name=first_name, appointment_id=appointment_id, status=status
        )
        return await self.send_email(
            to=to,
            subject=f"Appointment Update - #{appointment_id}",
            mjml_content=mjml_content,
        )

    async def send_contact_message(self, name: str, email: str, subject: str, message: str) -> dict:
        mjml_content = contact_message_template(
            name=name, email=email, subject=subject, message=message
        )
        return await self.send_email(
            to=self.admin_email,
            subject=f"Contact Form: {subject}",
            mjml_content=mjml_content,
        )

    async def send_newsletter_welcome(self, to: str) -> dict:
        return await self.send_email(
            to=to,
            subject=f"Welcome to {config.BUSINESS_NAME} Newsletter!",
            mjml_content=newsletter_welcome_template(),
        )


def get_email_sender(request: Request) -> EmailSender:
    """Dependency returning the mail client built at startup"""
    return request.app.state.email_sender
