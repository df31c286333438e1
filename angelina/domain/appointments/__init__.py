"""Appointment domain - intake, admin review and status lifecycle"""

from .router import router

__all__ = ["router"]
