"""
MindfulSpace Backend — Input Validation Helpers
=================================================

What:  Small checks shared by every resource service. They run before any
       store access and raise ValidationError (400).
"""

from typing import Optional

from app.exceptions import ValidationError

# Primary keys are 32-bit INTEGER columns.
MAX_ID = 2_147_483_647


def require_text(value: Optional[str], field: str, label: Optional[str] = None) -> str:
    """
    Return `value` stripped of surrounding whitespace.

    Raises:
        ValidationError: value is missing, not a string, or whitespace-only.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{label or field.capitalize()} is required", field=field)
    return value.strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip `value`; blank strings become None."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def require_id(value: Optional[int], field: str, label: str) -> int:
    if value is None:
        raise ValidationError(f"{label} is required", field=field)
    if value <= 0:
        raise ValidationError(f"{label} must be a positive integer", field=field)
    if value > MAX_ID:
        raise ValidationError(f"{label} is out of range", field=field)
    return value
