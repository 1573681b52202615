"""
Token Allocator
Sequential queue numbers per doctor-clinic per calendar day, starting at 1.

The max()+1 read is not atomic on its own. Callers hold the admission lock for
the doctor-clinic and the appointments table carries a unique constraint on
(doctor_clinic_id, appointment_day, token_number), so a lost race surfaces as
an IntegrityError on flush instead of a duplicate token.
"""
import logging
from datetime import date, datetime

from sqlalchemy import func, inspect

from clinic_queue.extensions import db
from clinic_queue.models import Appointment
from clinic_queue.models.appointment import STATUS_SCHEDULED

logger = logging.getLogger(__name__)


def next_token_number(doctor_clinic_id: int, day: date) -> int:
    """Highest token issued for the day plus one, or 1 for the first booking."""
    current_max = (
        db.session.query(func.max(Appointment.token_number))
        .filter(
            Appointment.doctor_clinic_id == doctor_clinic_id,
            Appointment.appointment_day == day,
        )
        .scalar()
    )
    return (current_max or 0) + 1


def insert_appointment(doctor_clinic_id: int, patient_id: int, appointment_time: datetime) -> Appointment:
    """
    Allocate the next token and stage the appointment.

    Flushes but does not commit; the caller owns the transaction.

    Raises:
        sqlalchemy.exc.IntegrityError: token taken by a concurrent writer
    """
    day = appointment_time.date()
    token_number = next_token_number(doctor_clinic_id, day)

    appointment = Appointment(
        patient_id=patient_id,
        doctor_clinic_id=doctor_clinic_id,
        token_number=token_number,
        appointment_time=appointment_time,
        appointment_day=day,
        status=STATUS_SCHEDULED,
    )
    db.session.add(appointment)
    db.session.flush()

    logger.debug("Allocated token #%s for doctor-clinic %s on %s", token_number, doctor_clinic_id, day)
    return appointment


def has_daily_token_guard() -> bool:
    """True when the appointments table carries the per-day token unique constraint."""
    inspector = inspect(db.engine)
    if 'appointments' not in inspector.get_table_names():
        return False
    return any(
        set(uc['column_names']) == {'doctor_clinic_id', 'appointment_day', 'token_number'}
        for uc in inspector.get_unique_constraints('appointments')
    )
