from .decorators import Actor, current_actor, require_role, require_staff

from .time_utils import clinic_now, parse_appointment_time, to_clinic_local

__all__ = [
    # Decorators
    "Actor",
    "current_actor",
    "require_role",
    "require_staff",
    # Time
    "clinic_now",
    "parse_appointment_time",
    "to_clinic_local",
]
