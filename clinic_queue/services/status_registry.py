"""
Doctor-Clinic Status Registry
Availability, arrival and "now serving" token, edited by clinic staff.
Writes are single-row, last-writer-wins.
"""
import logging

from clinic_queue.errors import NotFound, ValidationFailed
from clinic_queue.extensions import db
from clinic_queue.models import DoctorClinic
from clinic_queue.utils.decorators import require_staff

logger = logging.getLogger(__name__)


def status_of(doctor_clinic_id: int) -> DoctorClinic:
    doctor_clinic = db.session.get(DoctorClinic, doctor_clinic_id)
    if doctor_clinic is None:
        raise NotFound(f'Doctor-clinic {doctor_clinic_id} not found')
    return doctor_clinic


def set_status(actor, doctor_clinic_id: int, is_available, has_arrived) -> DoctorClinic:
    """
    Update availability and arrival flags.

    Raises:
        Unauthorized: actor is not clinic staff
        ValidationFailed: either flag is not a boolean
        NotFound: unknown pairing
    """
    require_staff(actor, 'update doctor status')
    if not isinstance(is_available, bool) or not isinstance(has_arrived, bool):
        raise ValidationFailed(
            'is_available and has_arrived must both be booleans',
            details={'is_available': is_available, 'has_arrived': has_arrived},
        )

    doctor_clinic = status_of(doctor_clinic_id)
    try:
        doctor_clinic.is_available = is_available
        doctor_clinic.has_arrived = has_arrived
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(
        "Doctor-clinic %s status set by user %s: available=%s arrived=%s",
        doctor_clinic_id, actor.user_id, is_available, has_arrived,
    )
    return doctor_clinic


def set_current_token(actor, doctor_clinic_id: int, token_number) -> DoctorClinic:
    """Move the "now serving" pointer. Independent of booking."""
    require_staff(actor, 'update the current token')
    # bool is an int subclass; reject it explicitly
    if isinstance(token_number, bool) or not isinstance(token_number, int):
        raise ValidationFailed('token_number must be an integer', details={'token_number': token_number})
    if token_number < 0:
        raise ValidationFailed('token_number must be >= 0', details={'token_number': token_number})

    doctor_clinic = status_of(doctor_clinic_id)
    try:
        doctor_clinic.current_token = token_number
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info("Doctor-clinic %s now serving token #%s", doctor_clinic_id, token_number)
    return doctor_clinic
