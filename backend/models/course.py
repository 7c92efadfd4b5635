"""Course model definitions."""

import math
from typing import Any

from pydantic import BaseModel

from backend.core.errors import ValidationError

MISSING_FIELDS_MESSAGE = "Missing required fields"
INVALID_CREDITS_MESSAGE = "Credits must be a valid number (>= 1)"
MIN_CREDITS = 1


class Course(BaseModel):
    """Represents a catalog course."""
    id: int
    name: str
    description: str
    subject: str
    credits: int | float

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name or subject."""
        needle = query.strip().lower()
        return not needle or needle in self.name.lower() or needle in self.subject.lower()


class CoursePayload(BaseModel):
    """Body accepted by course create and update requests.

    Fields are untyped so any JSON object parses; ``validate_course_payload``
    does the type checks and reports them with its two messages.
    """
    name: Any = None
    description: Any = None
    subject: Any = None
    credits: Any = None


class CourseFields(BaseModel):
    name: str
    description: str
    subject: str
    credits: int | float


def _format_number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _normalize_text(value: Any) -> str:
    # Scalars are stringified; falsy values, arrays and objects count as missing.
    if not value or isinstance(value, (list, dict)):
        return ""
    if isinstance(value, bool):
        return "true"
    if isinstance(value, (int, float)):
        return _format_number(value).strip()
    return str(value).strip()


def parse_credits(value: Any) -> int | float | None:
    """Return ``value`` as a finite number, or None when it is not one.

    Accepts JSON numbers and numeric strings. Integral values come back as
    ``int``.
    """
    if isinstance(value, bool) or value is None:
        return None

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def validate_course_payload(body: Any) -> CourseFields:
    if isinstance(body, CoursePayload):
        payload = body
    elif isinstance(body, dict):
        payload = CoursePayload.model_validate(body)
    else:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    name = _normalize_text(payload.name)
    description = _normalize_text(payload.description)
    subject = _normalize_text(payload.subject)

    if not name or not description or not subject or "credits" not in payload.model_fields_set:
        raise ValidationError(MISSING_FIELDS_MESSAGE)

    credits = parse_credits(payload.credits)
    if credits is None or credits < MIN_CREDITS:
        raise ValidationError(INVALID_CREDITS_MESSAGE)

    return CourseFields(name=name, description=description, subject=subject, credits=credits)
