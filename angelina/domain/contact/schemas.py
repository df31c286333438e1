"""Contact and newsletter schemas"""

from typing import Optional

from pydantic import BaseModel

CONTACT_REQUIRED_FIELDS = ("name", "email", "subject", "message")


class ContactRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    subject: Optional[str] = None
    message: Optional[str] = None


class NewsletterSubscribeRequest(BaseModel):
    email: Optional[str] = None
