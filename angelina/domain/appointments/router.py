"""Appointment router - FastAPI endpoints for appointment intake and admin review"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...database import get_db
from ...email_service import EmailSender, get_email_sender
from ...rate_limiter import rate_limit_public_forms
from .schemas import AppointmentCreate, AppointmentResponse, AppointmentStatusUpdate
from .service import DEFAULT_LIST_LIMIT, AppointmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/appointments", tags=["Appointments"])


def get_appointment_service(
    db: Session = Depends(get_db),
    email_sender: EmailSender = Depends(get_email_sender),
) -> AppointmentService:
    """Dependency injection for AppointmentService"""
    return AppointmentService(db, email_sender)


@router.post("", status_code=201)
async def submit_appointment(
    data: AppointmentCreate,
    service: AppointmentService = Depends(get_appointment_service),
    _ip: None = Depends(rate_limit_public_forms),
):
    """Public endpoint for the website appointment form"""
    appointment = await service.submit(data)
    return {
        "success": True,
        "message": "Appointment request submitted successfully",
        "appointmentId": appointment.id,
    }


@router.get("")
async def list_appointments(
    status: Optional[str] = Query(None),
    limit: int = Query(DEFAULT_LIST_LIMIT),
    offset: int = Query(0),
    service: AppointmentService = Depends(get_appointment_service),
):
    """List appointments, newest first (admin)"""
    appointments = service.list_appointments(status=status, limit=limit, offset=offset)
    data = [AppointmentResponse.model_validate(a).model_dump(mode="json") for a in appointments]
    return {"success": True, "data": data, "total": len(data)}


@router.get("/{appointment_id}")
async def get_appointment(
    appointment_id: int,
    service: AppointmentService = Depends(get_appointment_service),
):
    appointment = service.get(appointment_id)
    return {
        "success": True,
        "data": AppointmentResponse.model_validate(appointment).model_dump(mode="json"),
    }


@router.patch("/{appointment_id}/status")
async def update_appointment_status(
    appointment_id: int,
    data: AppointmentStatusUpdate,
    service: AppointmentService = Depends(get_appointment_service),
):
    """Transition an appointment's status; accepted, rejected and completed email the client"""
    await service.update_status(appointment_id, data.status, data.notes)
    return {"success": True, "message": "Appointment status updated successfully"}


@router.delete("/{appointment_id}")
async def delete_appointment(
    appointment_id: int,
    service: AppointmentService = Depends(get_appointment_service),
):
    service.delete(appointment_id)
    return {"success": True, "message": "Appointment deleted successfully"}
