"""
Demo directory data: doctors, clinics, pairings, consulting hours and one
clinic-staff account. Used by `flask seed-directory`.
"""
import logging
from datetime import time

from clinic_queue.extensions import db
from clinic_queue.models import Clinic, ConsultingHours, Doctor, DoctorClinic, User
from clinic_queue.models.user import ROLE_CLINIC_STAFF

logger = logging.getLogger(__name__)

DOCTORS = [
    {"name": "Dr. Sarah Johnson", "specialty": "General Medicine", "experience": 10},
    {"name": "Dr. Michael Chen", "specialty": "Cardiology", "experience": 15},
    {"name": "Dr. Emily Rodriguez", "specialty": "Pediatrics", "experience": 8},
    {"name": "Dr. James Wilson", "specialty": "Orthopedics", "experience": 12},
    {"name": "Dr. Lisa Thompson", "specialty": "Dermatology", "experience": 9},
    {"name": "Dr. Robert Lee", "specialty": "Neurology", "experience": 20},
]

CLINICS = [
    {"name": "City Care Clinic", "address": "12 MG Road, Bengaluru", "latitude": 12.9756, "longitude": 77.6050},
    {"name": "Lakeside Health Centre", "address": "4 Lake View, Bengaluru", "latitude": 12.9352, "longitude": 77.6245},
    {"name": "Harbour Family Practice", "address": "88 Marine Drive, Mumbai", "latitude": 18.9440, "longitude": 72.8230},
]

# (doctor index, clinic index, weekday windows)
PAIRINGS = [
    (0, 0, [(d, time(9, 0), time(13, 0), 20) for d in range(0, 6)]),
    (1, 0, [(d, time(17, 0), time(20, 0), 12) for d in (0, 2, 4)]),
    (2, 1, [(d, time(10, 0), time(14, 0), 15) for d in range(0, 5)]),
    (3, 1, [(1, time(9, 0), time(12, 0), 10), (3, time(9, 0), time(12, 0), 10)]),
    (4, 2, [(d, time(11, 0), time(16, 0), 18) for d in range(0, 6)]),
    (5, 2, [(0, time(9, 0), time(11, 0), 8), (0, time(15, 0), time(18, 0), 8)]),
]

DEFAULT_STAFF = {
    "mobile_number": "9000000001",
    "full_name": "Front Desk",
    "password": "staff123",
}


def create_staff_user(mobile_number, full_name, password):
    """Create a clinic_staff user unless the mobile number is taken."""
    existing = User.query.filter_by(mobile_number=mobile_number).first()
    if existing:
        return existing, False
    user = User(mobile_number=mobile_number, full_name=full_name, role=ROLE_CLINIC_STAFF, is_active=True)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user, True


def seed_directory():
    """Create demo directory rows if the doctors table is empty."""
    if Doctor.query.count() > 0:
        logger.info("Directory already seeded (skipping)")
        return False

    try:
        doctors = [Doctor(**d) for d in DOCTORS]
        clinics = [Clinic(**c) for c in CLINICS]
        db.session.add_all(doctors + clinics)
        db.session.flush()

        for doctor_idx, clinic_idx, windows in PAIRINGS:
            pairing = DoctorClinic(
                doctor_id=doctors[doctor_idx].id,
                clinic_id=clinics[clinic_idx].id,
                is_available=True,
                has_arrived=False,
                current_token=0,
            )
            db.session.add(pairing)
            db.session.flush()
            for day_of_week, start, end, max_patients in windows:
                db.session.add(ConsultingHours(
                    doctor_clinic_id=pairing.id,
                    day_of_week=day_of_week,
                    start_time=start,
                    end_time=end,
                    max_patients=max_patients,
                ))
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    create_staff_user(**DEFAULT_STAFF)
    logger.info("Seeded %d doctors, %d clinics, %d pairings", len(DOCTORS), len(CLINICS), len(PAIRINGS))
    return True
