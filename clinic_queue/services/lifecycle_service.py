"""
Appointment Lifecycle Manager
Staff-driven status transitions. Appointments are never deleted; cancelling
is a status.
"""
import logging
from typing import Dict, Tuple

from clinic_queue.errors import InvalidTransition, NotFound, ValidationFailed
from clinic_queue.extensions import db
from clinic_queue.models import Appointment
from clinic_queue.models.appointment import (
    APPOINTMENT_STATUSES,
    STATUS_CANCELLED,
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_SCHEDULED,
)
from clinic_queue.utils.decorators import require_staff

logger = logging.getLogger(__name__)

VALID_TRANSITIONS: Dict[str, Tuple[str, ...]] = {
    STATUS_SCHEDULED: (STATUS_IN_PROGRESS, STATUS_CANCELLED),
    STATUS_IN_PROGRESS: (STATUS_COMPLETED, STATUS_CANCELLED),
    # terminal
    STATUS_COMPLETED: (),
    STATUS_CANCELLED: (),
}


def can_transition(current: str, intended: str) -> bool:
    return intended in VALID_TRANSITIONS.get(current, ())


def update_status(actor, appointment_id: int, new_status: str) -> Appointment:
    """
    Move an appointment along the state machine.

    Raises:
        Unauthorized: actor is not clinic staff
        ValidationFailed: unknown status value
        NotFound: unknown appointment
        InvalidTransition: transition not allowed from the current status
    """
    require_staff(actor, 'update appointment status')
    if new_status not in APPOINTMENT_STATUSES:
        raise ValidationFailed(
            f'Invalid status. Valid values: {", ".join(APPOINTMENT_STATUSES)}',
            details={'status': new_status},
        )

    appointment = db.session.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFound(f'Appointment {appointment_id} not found')

    current = appointment.status
    if not can_transition(current, new_status):
        raise InvalidTransition(
            f'Cannot change status from {current} to {new_status}',
            details={'from': current, 'to': new_status},
        )

    try:
        appointment.status = new_status
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info("Appointment %s: %s -> %s by user %s", appointment_id, current, new_status, actor.user_id)
    return appointment
