"""
MJML Email Templates
Transactional emails for appointment intake, status updates, contact and newsletter
"""

from html import escape
from typing import Optional

from .config import ADMIN_EMAIL, BUSINESS_NAME, BUSINESS_PHONE, BUSINESS_WHATSAPP

# Brand colors - cyan/violet gradient from the website
THEME = {
    "primary": "#00f0ff",
    "secondary": "#a000ff",
    "background": "#f9f9f9",
    "card_bg": "#ffffff",
    "text_primary": "#000000",
    "text_secondary": "#333333",
    "text_muted": "#666666",
    "border": "#e2e8f0",
}

# Client-facing copy for the statuses that notify the client
STATUS_MESSAGES = {
    "accepted": "Your appointment has been accepted! We will contact you soon to discuss the details.",
    "rejected": "We regret to inform you that we cannot proceed with your request at this time.",
    "completed": "Your project has been completed! Thank you for working with us.",
}


def get_base_template(
    title: str,
    preview_text: str,
    content_sections: str,
    footer_note: Optional[str] = None,
) -> str:
    """Base MJML template wrapper for all emails"""

    footer_notice = ""
    if footer_note:
        footer_notice = f"""
        <mj-text align="center" font-size="12px" color="{THEME['text_muted']}" padding="12px 0 0 0">
          {footer_note}
        </mj-text>
        """

    return f"""
    <mjml>
      <mj-head>
        <mj-title>{title}</mj-title>
        <mj-preview>{preview_text}</mj-preview>
        <mj-attributes>
          <mj-all font-family="Arial, sans-serif" />
          <mj-text font-size="16px" line-height="1.6" color="{THEME['text_secondary']}" />
        </mj-attributes>
      </mj-head>
      <mj-body background-color="{THEME['background']}" width="600px">
        <!-- Header -->
        <mj-section background-color="{THEME['primary']}" padding="30px 20px">
          <mj-column>
            <mj-text align="center" font-size="28px" font-weight="700" color="{THEME['text_primary']}" padding="0">
              {BUSINESS_NAME}
            </mj-text>
          </mj-column>
        </mj-section>

        <!-- Main Content -->
        <mj-section background-color="{THEME['card_bg']}" padding="30px">
          <mj-column>
            <mj-text font-size="22px" font-weight="600" color="{THEME['text_primary']}" padding="0 0 16px 0">
              {title}
            </mj-text>

            {content_sections}
          </mj-column>
        </mj-section>

        <!-- Footer -->
        <mj-section padding="20px">
          <mj-column>
            <mj-text align="center" font-size="14px" color="{THEME['text_muted']}" padding="0">
              © 2026 {BUSINESS_NAME} | All Rights Reserved
            </mj-text>
            {footer_notice}
          </mj-column>
        </mj-section>
      </mj-body>
    </mjml>
    """


def _details_box(heading: str, rows: list[tuple[str, str]]) -> str:
    lines = "<br/>".join(f"<strong>{label}:</strong> {value}" for label, value in rows)
    return f"""
    <mj-text font-weight="600" color="{THEME['text_primary']}" padding="20px 0 8px 0"
             container-background-color="#ffffff">
      {heading}
    </mj-text>
    <mj-text padding="0 0 0 16px" container-background-color="#ffffff">
      {lines}
    </mj-text>
    """


def client_confirmation_template(
    first_name: str,
    surname: str,
    appointment_id: int,
    work_type: str,
    ranking: str,
) -> str:
    """Appointment received confirmation sent to the client"""
    details = _details_box(
        "Your Request Details:",
        [
            ("Appointment ID", f"#{appointment_id}"),
            ("Service", escape(work_type)),
            ("Package", escape(ranking)),
        ],
    )

    content = f"""
    <mj-text font-size="18px" font-weight="600" color="{THEME['text_primary']}">
      Hello {escape(first_name)} {escape(surname)}!
    </mj-text>

    <mj-text>
      Thank you for your appointment request. We've received your information and will review it shortly.
    </mj-text>

    {details}

    <mj-text>
      We typically respond within 24 hours. If you have any urgent questions, feel free to contact us directly:
    </mj-text>

    <mj-text padding="0 0 0 20px">
      • Email: {ADMIN_EMAIL}<br/>
      • WhatsApp: {BUSINESS_WHATSAPP}<br/>
      • Phone: {BUSINESS_PHONE}
    </mj-text>
    """

    return get_base_template(
        title="Appointment Request Received",
        preview_text=f"We received your request #{appointment_id}",
        content_sections=content,
    )


def admin_notification_template(
    appointment_id: int,
    first_name: str,
    surname: str,
    email: str,
    phone: str,
    work_type: str,
    ranking: str,
    description: str,
) -> str:
    """New appointment alert for the administrator"""
    details = _details_box(
        "Request",
        [
            ("ID", f"#{appointment_id}"),
            ("Client", f"{escape(first_name)} {escape(surname)}"),
            ("Email", escape(email)),
            ("Phone", escape(phone)),
            ("Service", escape(work_type)),
            ("Package", escape(ranking)),
        ],
    )

    content = f"""
    {details}

    <mj-text font-weight="600" color="{THEME['text_primary']}" padding="20px 0 8px 0">
      Description:
    </mj-text>
    <mj-text>
      {escape(description)}
    </mj-text>
    """

    return get_base_template(
        title="New Appointment Request",
        preview_text=f"New Appointment Request #{appointment_id}",
        content_sections=content,
    )


def status_update_template(first_name: str, appointment_id: int, status: str) -> str:
    """Status change notice for the client; status must be a key of STATUS_MESSAGES"""
    content = f"""
    <mj-text>
      Hello {escape(first_name)}!
    </mj-text>

    <mj-text>
      {STATUS_MESSAGES[status]}
    </mj-text>

    <mj-text>
      If you have any questions, please contact us.
    </mj-text>
    """

    return get_base_template(
        title="Appointment Status Update",
        preview_text=f"Appointment Update - #{appointment_id}",
        content_sections=content,
    )


def contact_message_template(name: str, email: str, subject: str, message: str) -> str:
    """Contact form submission forwarded to the administrator"""
    details = _details_box(
        "From",
        [
            ("Name", escape(name)),
            ("Email", escape(email)),
            ("Subject", escape(subject)),
        ],
    )

    content = f"""
    {details}

    <mj-text font-weight="600" color="{THEME['text_primary']}" padding="20px 0 8px 0">
      Message:
    </mj-text>
    <mj-text>
      {escape(message)}
    </mj-text>
    """

    return get_base_template(
        title="New Contact Form Submission",
        preview_text=f"Contact Form: {escape(subject)}",
        content_sections=content,
    )


def newsletter_welcome_template() -> str:
    content = """
    <mj-text>
      You'll now receive our latest updates and news.
    </mj-text>

    <mj-text>
      Stay tuned for amazing content!
    </mj-text>
    """

    return get_base_template(
        title="Thank You for Subscribing!",
        preview_text=f"Welcome to the {BUSINESS_NAME} newsletter",
        content_sections=content,
        footer_note="You're receiving this because you subscribed on our website.",
    )
