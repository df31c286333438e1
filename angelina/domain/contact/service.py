"""Contact form and newsletter business logic"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from ...email_service import EmailSender
from ...models import NewsletterSubscriber
from ...services.notification_service import send_best_effort
from ...shared.errors import (
    AlreadySubscribedError,
    NotificationError,
    StoreError,
    ValidationError,
)
from ...shared.validators import is_blank, require_fields, validate_email
from .repository import SubscriberRepository
from .schemas import CONTACT_REQUIRED_FIELDS, ContactRequest

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, db: Session, email_sender: EmailSender):
        self.db = db
        self.email_sender = email_sender
        self.repo = SubscriberRepository()

    async def submit_contact(self, data: ContactRequest) -> None:
        """Forward a contact form message to the admin inbox.

        Delivery is the whole point here, so a send failure is an error.
        """
        require_fields(data.model_dump(), CONTACT_REQUIRED_FIELDS)
        email = validate_email(data.email)

        try:
            await self.email_sender.send_contact_message(
                name=data.name.strip(),
                email=email,
                subject=data.subject.strip(),
                message=data.message.strip(),
            )
        except NotificationError as e:
            logger.error(f"❌ Error sending contact message from {email}: {e}")
            raise NotificationError("Error sending message") from e

        logger.info(f"✅ Contact message from {email} forwarded to admin")

    async def subscribe(self, email: str | None) -> NewsletterSubscriber:
        """Add an email to the newsletter and send the welcome email.

        The unique constraint on email decides duplicates; the lookup first
        only avoids a failed insert in the usual case. The welcome email is
        best-effort and never undoes the subscription.
        """
        if is_blank(email):
            raise ValidationError("Email is required")
        email = validate_email(email).lower()

        try:
            if self.repo.get_by_email(self.db, email):
                raise AlreadySubscribedError("Email already subscribed")
            subscriber = self.repo.create_subscriber(self.db, email)
        except IntegrityError as e:
            self.db.rollback()
            logger.info(f"Concurrent subscribe for {email} lost the insert race")
            raise AlreadySubscribedError("Email already subscribed") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"❌ Error subscribing to newsletter: {e}")
            raise StoreError("Error processing subscription") from e

        logger.info(f"📰 New newsletter subscriber #{subscriber.id}")

        await send_best_effort(
            "newsletter welcome",
            self.email_sender.send_newsletter_welcome,
            to=email,
        )
        return subscriber
