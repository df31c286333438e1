"""Appointment service - Business logic for the appointment lifecycle"""

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...email_service import EmailSender
from ...models import APPOINTMENT_STATUSES, Appointment
from ...services.notification_service import send_best_effort
from ...shared.errors import NotFoundError, StoreError, ValidationError
from ...shared.validators import clean_optional, require_fields, validate_email, validate_phone
from .repository import AppointmentRepository
from .schemas import REQUIRED_FIELDS, AppointmentCreate

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 50
MAX_LIST_LIMIT = 100

# Target statuses that email the client
NOTIFY_STATUSES = ("accepted", "rejected", "completed")


class AppointmentService:
    """Service layer for appointment business logic"""

    def __init__(self, db: Session, email_sender: EmailSender):
        self.db = db
        self.email_sender = email_sender
        self.repo = AppointmentRepository()

    async def submit(self, data: AppointmentCreate) -> Appointment:
        """Validate and store a new request, then notify the client and the admin.

        Both emails are best-effort: once the row is committed the request has
        succeeded whatever happens to delivery.
        """
        fields = data.model_dump()
        require_fields(fields, REQUIRED_FIELDS)

        email = validate_email(data.email)
        whatsapp = validate_phone(data.whatsapp, "WhatsApp")
        phone = validate_phone(data.phone, "phone")

        appointment_data = {
            "first_name": data.firstName.strip(),
            "middle_name": clean_optional(data.middleName),
            "surname": data.surname.strip(),
            "email": email,
            "whatsapp": whatsapp,
            "phone": phone,
            "location": data.location.strip(),
            "work_type": data.work.strip(),
            "ranking": data.ranking.strip(),
            "budget": clean_optional(data.budget),
            "timeline": clean_optional(data.timeline),
            "description": data.description.strip(),
            "reference": clean_optional(data.reference),
            "maintenance": bool(data.maintenance),
            "hosting": bool(data.hosting),
            "seo": bool(data.seo),
            "hear_about": clean_optional(data.hear),
            "status": "pending",
        }

        try:
            appointment = self.repo.create_appointment(self.db, **appointment_data)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"❌ Error submitting appointment: {e}")
            raise StoreError("Error processing your request") from e

        logger.info(f"📥 Appointment #{appointment.id} submitted by {appointment.email}")

        confirmation = await send_best_effort(
            "client confirmation",
            self.email_sender.send_client_confirmation,
            to=appointment.email,
            first_name=appointment.first_name,
            surname=appointment.surname,
            appointment_id=appointment.id,
            work_type=appointment.work_type,
            ranking=appointment.ranking,
        )
        admin_alert = await send_best_effort(
            "admin notification",
            self.email_sender.send_admin_notification,
            appointment_id=appointment.id,
            first_name=appointment.first_name,
            surname=appointment.surname,
            email=appointment.email,
            phone=appointment.phone,
            work_type=appointment.work_type,
            ranking=appointment.ranking,
            description=appointment.description,
        )
        if not (confirmation.sent and admin_alert.sent):
            logger.warning(
                f"⚠️ Appointment #{appointment.id} stored but notifications incomplete "
                f"(client={confirmation.sent}, admin={admin_alert.sent})"
            )

        return appointment

    def list_appointments(
        self,
        status: Optional[str] = None,
        limit: int = DEFAULT_LIST_LIMIT,
        offset: int = 0,
    ) -> list[Appointment]:
        if status and status not in APPOINTMENT_STATUSES:
            raise ValidationError("Invalid status")
        if limit < 1:
            raise ValidationError("limit must be at least 1")
        if offset < 0:
            raise ValidationError("offset must not be negative")

        limit = min(limit, MAX_LIST_LIMIT)

        try:
            return self.repo.get_appointments(self.db, status=status, limit=limit, offset=offset)
        except SQLAlchemyError as e:
            logger.exception(f"❌ Error fetching appointments: {e}")
            raise StoreError("Error fetching appointments") from e

    def get(self, appointment_id: int) -> Appointment:
        try:
            appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        except SQLAlchemyError as e:
            logger.exception(f"❌ Error fetching appointment {appointment_id}: {e}")
            raise StoreError("Error fetching appointment") from e

        if not appointment:
            raise NotFoundError("Appointment not found")
        return appointment

    async def update_status(
        self, appointment_id: int, status: Optional[str], notes: Optional[str] = None
    ) -> Optional[Appointment]:
        """Move an appointment to any status and email the client where the status calls for it.

        A missing id updates nothing and sends nothing.
        """
        if status not in APPOINTMENT_STATUSES:
            raise ValidationError("Invalid status")

        try:
            self.repo.update_status(self.db, appointment_id, status, clean_optional(notes))
            appointment = self.repo.get_appointment_by_id(self.db, appointment_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"❌ Error updating appointment {appointment_id}: {e}")
            raise StoreError("Error updating appointment") from e

        if appointment is None:
            logger.info(f"Status update for unknown appointment {appointment_id} ignored")
            return None

        logger.info(f"✅ Appointment #{appointment_id} transitioned to {status}")

        if status in NOTIFY_STATUSES:
            await send_best_effort(
                f"status update ({status})",
                self.email_sender.send_status_update,
                to=appointment.email,
                first_name=appointment.first_name,
                appointment_id=appointment.id,
                status=status,
            )

        return appointment

    def delete(self, appointment_id: int) -> None:
        try:
            deleted = self.repo.delete_appointment(self.db, appointment_id)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"❌ Error deleting appointment {appointment_id}: {e}")
            raise StoreError("Error deleting appointment") from e

        logger.info(f"🗑️ Delete appointment {appointment_id}: {deleted} row(s) removed")
