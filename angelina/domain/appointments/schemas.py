"""Appointment domain schemas - Pydantic models for request and response bodies"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

# Field names as posted by the website form
REQUIRED_FIELDS = (
    "firstName",
    "surname",
    "email",
    "whatsapp",
    "phone",
    "location",
    "work",
    "ranking",
    "description",
)


class AppointmentCreate(BaseModel):
    """Schema for an appointment request from the website form.

    Everything is optional at the schema level so that missing fields are
    reported together by the service instead of as a pydantic error list.
    """

    firstName: Optional[str] = None
    middleName: Optional[str] = None
    surname: Optional[str] = None
    email: Optional[str] = None
    whatsapp: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    work: Optional[str] = None
    ranking: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    description: Optional[str] = None
    reference: Optional[str] = None
    maintenance: bool = False
    hosting: bool = False
    seo: bool = False
    hear: Optional[str] = None


class AppointmentStatusUpdate(BaseModel):
    """Schema for an admin status transition"""

    status: Optional[str] = None
    notes: Optional[str] = None


class AppointmentResponse(BaseModel):
    """Stored appointment row, keyed by column name"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    first_name: str
    middle_name: Optional[str] = None
    surname: str
    email: str
    whatsapp: str
    phone: str
    location: str
    work_type: str
    ranking: str
    budget: Optional[str] = None
    timeline: Optional[str] = None
    description: str
    reference: Optional[str] = None
    maintenance: bool
    hosting: bool
    seo: bool
    hear_about: Optional[str] = None
    status: str
    admin_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
