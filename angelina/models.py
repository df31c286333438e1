from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from .database import Base

APPOINTMENT_STATUSES = ("pending", "reviewed", "accepted", "rejected", "completed")


class Appointment(Base):
    __tablename__ = "appointments"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'reviewed', 'accepted', 'rejected', 'completed')",
            name="ck_appointments_status",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    middle_name = Column(String(100), nullable=True)
    surname = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    whatsapp = Column(String(50), nullable=False)
    phone = Column(String(50), nullable=False)
    location = Column(String(255), nullable=False)
    work_type = Column(String(100), nullable=False)  # landing, ecommerce, webapp, ...
    ranking = Column(String(100), nullable=False)  # Package tier for the work type
    budget = Column(String(100), nullable=True)
    timeline = Column(String(100), nullable=True)
    description = Column(Text, nullable=False)
    reference = Column(String(500), nullable=True)  # Reference site or inspiration link
    # Add-ons
    maintenance = Column(Boolean, default=False, nullable=False)
    hosting = Column(Boolean, default=False, nullable=False)
    seo = Column(Boolean, default=False, nullable=False)
    hear_about = Column(String(100), nullable=True)
    status = Column(String(20), default="pending", nullable=False, index=True)
    admin_notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime, nullable=True)  # Set on status transitions only


class NewsletterSubscriber(Base):
    __tablename__ = "newsletter_subscribers"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    subscribed_at = Column(DateTime, server_default=func.now(), nullable=False)
