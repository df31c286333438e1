"""
Best-effort notification delivery
Used where an email is a courtesy and must never fail the business operation
"""

import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NotificationResult:
    sent: bool
    error: Optional[str] = None


async def send_best_effort(
    notification_type: str,
    email_func: Callable[..., Awaitable[Optional[dict]]],
    **email_kwargs,
) -> NotificationResult:
    """
    Await an email send and report the outcome instead of raising.

    Args:
        notification_type: Label for logging (e.g. "client confirmation")
        email_func: EmailSender coroutine method to call
        email_kwargs: Kwargs for the email function

    Returns:
        NotificationResult with sent flag and error text on failure
    """
    try:
        logger.info(f"📧 Sending {notification_type} email")
        await email_func(**email_kwargs)
    except Exception as e:
        logger.error(f"❌ Failed to send {notification_type} email: {e}")
        return NotificationResult(sent=False, error=str(e))

    logger.info(f"✅ {notification_type} email sent successfully")
    return NotificationResult(sent=True)
