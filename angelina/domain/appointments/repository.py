"""Appointment repository - Database operations for appointments"""

from typing import Optional

from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from ...models import Appointment


class AppointmentRepository:
    """Repository for appointment database operations"""

    @staticmethod
    def create_appointment(db: Session, **appointment_data) -> Appointment:
        """Insert a new appointment and return it with its generated id"""
        appointment = Appointment(**appointment_data)
        db.add(appointment)
        db.commit()
        db.refresh(appointment)
        return appointment

    @staticmethod
    def get_appointments(
        db: Session,
        status: Optional[str] = None,
        limit: int = 50,
        offset: int = 0,
    ) -> list[Appointment]:
        """Newest first, optionally filtered by status"""
        query = db.query(Appointment)

        if status:
            query = query.filter(Appointment.status == status)

        return (
            query.order_by(Appointment.created_at.desc(), Appointment.id.desc())
            .limit(limit)
            .offset(offset)
            .all()
        )

    @staticmethod
    def get_appointment_by_id(db: Session, appointment_id: int) -> Optional[Appointment]:
        return db.query(Appointment).filter(Appointment.id == appointment_id).first()

    @staticmethod
    def update_status(
        db: Session, appointment_id: int, status: str, admin_notes: Optional[str]
    ) -> int:
        """Set status, notes and updated_at in one statement; returns rows matched"""
        updated = (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .update(
                {
                    Appointment.status: status,
                    Appointment.admin_notes: admin_notes,
                    Appointment.updated_at: func.now(),
                },
                synchronize_session=False,
            )
        )
        db.commit()
        return updated

    @staticmethod
    def delete_appointment(db: Session, appointment_id: int) -> int:
        """Delete by id without loading the row; returns rows deleted"""
        deleted = (
            db.query(Appointment)
            .filter(Appointment.id == appointment_id)
            .delete(synchronize_session=False)
        )
        db.commit()
        return deleted
