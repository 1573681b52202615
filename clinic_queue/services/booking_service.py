"""
Booking Admission Engine
Validates a booking request against the doctor-clinic's status, consulting
hours and daily capacity, then hands off to the token allocator.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from clinic_queue.errors import (
    CapacityExceeded,
    Conflict,
    NotFound,
    NoWindow,
    OutsideWindow,
    Unauthorized,
    Unavailable,
    ValidationFailed,
)
from clinic_queue.extensions import db
from clinic_queue.models import Appointment, DoctorClinic, User
from clinic_queue.models.appointment import STATUS_CANCELLED
from clinic_queue.models.consulting_hours import DAY_NAMES
from clinic_queue.services.consulting_hours_service import windows_for
from clinic_queue.services.locks import admission_locks
from clinic_queue.services.token_allocator import insert_appointment
from clinic_queue.utils.time_utils import clinic_now

logger = logging.getLogger(__name__)


def _resolve_patient(actor, patient_id: Optional[int]) -> int:
    """Patients book for themselves; staff book on behalf of a named patient."""
    if actor is None:
        raise Unauthorized('Authentication required')

    if actor.is_patient:
        if patient_id is not None and patient_id != actor.user_id:
            raise Unauthorized('Patients may only book appointments for themselves')
        patient_id = actor.user_id
    elif actor.is_staff:
        if patient_id is None:
            raise ValidationFailed('Field "patient_id" is required when booking on behalf of a patient')
    else:
        raise Unauthorized(f'Role {actor.role!r} may not book appointments')

    patient = db.session.get(User, patient_id)
    if patient is None or not patient.is_active:
        raise NotFound(f'Patient {patient_id} not found')
    return patient.id


def _count_booked(doctor_clinic_id: int, window, day) -> int:
    window_start = datetime.combine(day, window.start_time)
    window_end = datetime.combine(day, window.end_time)
    query = Appointment.query.filter(
        Appointment.doctor_clinic_id == doctor_clinic_id,
        Appointment.appointment_day == day,
        Appointment.appointment_time >= window_start,
        Appointment.appointment_time <= window_end,
    )
    if not current_app.config.get('COUNT_CANCELLED_TOWARDS_CAPACITY', True):
        query = query.filter(Appointment.status != STATUS_CANCELLED)
    return query.count()


def _admit(doctor_clinic_id: int, requested: datetime, patient_id: int) -> Appointment:
    """Validation pipeline (steps 1-6). Raises on the first failing check."""
    # Step 1: Pairing exists (row-locked for the rest of the transaction where supported)
    doctor_clinic = (
        DoctorClinic.query
        .filter_by(id=doctor_clinic_id)
        .with_for_update()
        .first()
    )
    if doctor_clinic is None:
        raise NotFound(f'Doctor-clinic {doctor_clinic_id} not found')

    # Step 2: Accepting patients
    if not doctor_clinic.is_available:
        raise Unavailable(
            'Doctor is not available',
            details={'doctor_clinic_id': doctor_clinic_id},
        )

    # Step 3: Consulting hours for the weekday
    day_of_week = requested.weekday()
    windows = windows_for(doctor_clinic_id, day_of_week)
    if not windows:
        raise NoWindow(
            f'No consulting hours on {DAY_NAMES[day_of_week]}',
            details={'day_of_week': day_of_week, 'day_name': DAY_NAMES[day_of_week]},
        )

    # Step 4: Time of day inside a window
    time_of_day = requested.time()
    window = next((w for w in windows if w.contains(time_of_day)), None)
    if window is None:
        bounds = [w.bounds() for w in windows]
        ranges = ', '.join(f"{b['start_time']}-{b['end_time']}" for b in bounds)
        raise OutsideWindow(
            f'Appointment time {time_of_day.strftime("%H:%M")} is outside consulting hours ({ranges})',
            details={
                'requested_time': time_of_day.strftime('%H:%M'),
                'day_of_week': day_of_week,
                'windows': bounds,
            },
        )

    # Step 5: Capacity of the matched window on that day
    day = requested.date()
    booked = _count_booked(doctor_clinic_id, window, day)
    if booked >= window.max_patients:
        raise CapacityExceeded(
            'No slots left in this consulting window',
            details={
                'date': day.isoformat(),
                'max_patients': window.max_patients,
                'booked': booked,
                **window.bounds(),
            },
        )

    # Step 6: Token + insert
    return insert_appointment(doctor_clinic_id, patient_id, requested)


def book(actor, doctor_clinic_id: int, appointment_time: Optional[datetime] = None,
         patient_id: Optional[int] = None) -> Appointment:
    """
    Admit a booking request and persist it with the next token number.

    Args:
        actor: Actor capability of the caller
        doctor_clinic_id: DoctorClinic ID
        appointment_time: naive clinic-local datetime; defaults to now
        patient_id: required for staff, optional for patients

    Returns:
        Appointment: the committed appointment, status 'scheduled'

    Raises:
        QueueError subclasses; nothing is written on failure
    """
    patient_id = _resolve_patient(actor, patient_id)
    requested = appointment_time or clinic_now()
    attempts = max(1, int(current_app.config.get('TOKEN_ALLOCATION_RETRIES', 3)))

    with admission_locks.hold(doctor_clinic_id):
        for attempt in range(1, attempts + 1):
            try:
                appointment = _admit(doctor_clinic_id, requested, patient_id)
                db.session.commit()
            except IntegrityError:
                db.session.rollback()
                logger.warning(
                    "Token collision for doctor-clinic %s on %s (attempt %d/%d)",
                    doctor_clinic_id, requested.date(), attempt, attempts,
                )
                continue
            except Exception:
                db.session.rollback()
                raise

            logger.info(
                "Booked token #%s for patient %s at doctor-clinic %s (%s)",
                appointment.token_number, patient_id, doctor_clinic_id, requested.isoformat(),
            )
            return appointment

    raise Conflict(
        'Could not allocate a token, please retry',
        details={'doctor_clinic_id': doctor_clinic_id, 'date': requested.date().isoformat()},
    )


def appointment_to_dict(appointment: Appointment) -> Dict[str, Any]:
    """Appointment enriched with doctor, clinic and the live queue pointer."""
    data = appointment.to_dict()
    doctor_clinic = appointment.doctor_clinic
    data.update({
        'doctor_name': doctor_clinic.doctor.name if doctor_clinic and doctor_clinic.doctor else None,
        'clinic_name': doctor_clinic.clinic.name if doctor_clinic and doctor_clinic.clinic else None,
        'current_token': doctor_clinic.current_token if doctor_clinic else None,
        'has_arrived': doctor_clinic.has_arrived if doctor_clinic else None,
    })
    return data


def _check_visibility(actor, patient_id: int) -> None:
    if actor is None:
        raise Unauthorized('Authentication required')
    if not actor.is_staff and actor.user_id != patient_id:
        raise Unauthorized('Patients may only view their own appointments')


def list_appointments(actor, patient_id: int) -> List[Dict[str, Any]]:
    """A patient's appointments, newest first."""
    _check_visibility(actor, patient_id)
    appointments = (
        Appointment.query
        .filter_by(patient_id=patient_id)
        .order_by(Appointment.appointment_time.desc(), Appointment.id.desc())
        .all()
    )
    return [appointment_to_dict(a) for a in appointments]


def get_appointment(actor, appointment_id: int) -> Appointment:
    appointment = db.session.get(Appointment, appointment_id)
    if appointment is None:
        raise NotFound(f'Appointment {appointment_id} not found')
    _check_visibility(actor, appointment.patient_id)
    return appointment
