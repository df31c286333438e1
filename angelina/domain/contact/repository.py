"""Newsletter subscriber repository"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import NewsletterSubscriber


class SubscriberRepository:
    @staticmethod
    def get_by_email(db: Session, email: str) -> Optional[NewsletterSubscriber]:
        return db.query(NewsletterSubscriber).filter(NewsletterSubscriber.email == email).first()

    @staticmethod
    def create_subscriber(db: Session, email: str) -> NewsletterSubscriber:
        """Insert a subscriber; raises IntegrityError when the email already exists"""
        subscriber = NewsletterSubscriber(email=email)
        db.add(subscriber)
        db.commit()
        db.refresh(subscriber)
        return subscriber
