"""
Consulting Hours Directory
Read-only lookup of a doctor-clinic's weekly windows.
"""
from typing import List

from clinic_queue.errors import NotFound
from clinic_queue.extensions import db
from clinic_queue.models import ConsultingHours, DoctorClinic


def windows_for(doctor_clinic_id: int, day_of_week: int) -> List[ConsultingHours]:
    """Windows for one weekday ordered by start time; empty when the day is not bookable."""
    return (
        ConsultingHours.query
        .filter_by(doctor_clinic_id=doctor_clinic_id, day_of_week=day_of_week)
        .order_by(ConsultingHours.start_time.asc())
        .all()
    )


def weekly_schedule(doctor_clinic_id: int) -> List[ConsultingHours]:
    """All windows for a pairing, Monday first."""
    if db.session.get(DoctorClinic, doctor_clinic_id) is None:
        raise NotFound(f'Doctor-clinic {doctor_clinic_id} not found')
    return (
        ConsultingHours.query
        .filter_by(doctor_clinic_id=doctor_clinic_id)
        .order_by(ConsultingHours.day_of_week.asc(), ConsultingHours.start_time.asc())
        .all()
    )
