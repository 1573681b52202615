"""
Clinic-local time helpers.

Appointment times are stored as naive datetimes in the clinic timezone so
that the calendar day (token scope) is local midnight to midnight.
"""
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from flask import current_app

from clinic_queue.errors import ValidationFailed


def clinic_timezone() -> ZoneInfo:
    name = current_app.config.get('CLINIC_TIMEZONE', 'UTC')
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError:
        raise ValueError(f"Unknown CLINIC_TIMEZONE: {name}")


def clinic_now() -> datetime:
    """Current clinic-local wall clock, naive."""
    return datetime.now(clinic_timezone()).replace(tzinfo=None, microsecond=0)


def to_clinic_local(value: datetime) -> datetime:
    """Aware datetimes are converted to clinic time; naive ones are taken as already local."""
    if value.tzinfo is None:
        return value
    return value.astimezone(clinic_timezone()).replace(tzinfo=None)


def parse_appointment_time(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 appointment time.

    Args:
        value: e.g. "2024-03-04T09:30", "2024-03-04T09:30:00+05:30" or "...Z"

    Returns:
        Naive clinic-local datetime, or None when no value was supplied

    Raises:
        ValidationFailed: unparseable input
    """
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise ValidationFailed('appointment_time must be an ISO-8601 string')

    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationFailed(
            'Invalid appointment_time. Use ISO-8601, e.g. 2024-03-04T09:30',
            details={'appointment_time': value},
        )
    return to_clinic_local(parsed)
