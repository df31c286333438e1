"""Shared validation utilities"""

import re
from typing import Any, Iterable, Optional

from .errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^[\d\s+\-()]+$")


def is_blank(value: Any) -> bool:
    """True for None and for strings that are empty after trimming"""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    return False


def require_fields(data: dict, fields: Iterable[str]) -> None:
    """
    Ensure every named field is present and non-blank.

    Raises:
        ValidationError: listing the missing fields in the order given
    """
    missing = [field for field in fields if is_blank(data.get(field))]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Trimmed email address

    Raises:
        ValidationError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip()

    if len(email) > 255 or not EMAIL_PATTERN.match(email):
        raise ValidationError("Please enter a valid email address")

    return email


def validate_phone(phone: Optional[str], field: str = "phone") -> Optional[str]:
    """
    Validate a phone or WhatsApp number.

    International numbers are accepted as typed: digits, spaces, "+", "-" and
    parentheses.
    """
    if not phone:
        return phone

    phone = phone.strip()

    if not PHONE_PATTERN.match(phone):
        raise ValidationError(f"Please enter a valid {field} number")

    return phone


def clean_optional(value: Optional[str]) -> Optional[str]:
    """Trim an optional string, mapping blank values to None"""
    if is_blank(value):
        return None
    return value.strip()
