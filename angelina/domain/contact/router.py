"""Contact form and newsletter endpoints"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...database import get_db
from ...email_service import EmailSender, get_email_sender
from ...rate_limiter import rate_limit_public_forms
from .schemas import ContactRequest, NewsletterSubscribeRequest
from .service import ContactService

router = APIRouter(prefix="/api", tags=["Contact"])


def get_contact_service(
    db: Session = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender),
) -> ContactService:
    return ContactService(db, email_sender)


@router.post("/contact")
async def submit_contact(
    data: ContactRequest,
    service: ContactService = Depends(get_contact_service),
    _ip: None = Depends(rate_limit_public_forms),
):
    await service.submit_contact(data)
    return {"success": True, "message": "Message sent successfully"}


@router.post("/newsletter")
async def subscribe_newsletter(
    data: NewsletterSubscribeRequest,
    service: ContactService = Depends(get_contact_service),
    _ip: None = Depends(rate_limit_public_forms),
):
    await service.subscribe(data.email)
    return {"success": True, "message": "Successfully subscribed to newsletter"}
