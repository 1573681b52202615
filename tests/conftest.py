"""Shared test fixtures."""
from datetime import datetime, time

import pytest
from flask_jwt_extended import create_access_token

from clinic_queue import create_app
from clinic_queue.extensions import db
from clinic_queue.models import Clinic, ConsultingHours, Doctor, DoctorClinic, User
from clinic_queue.models.user import ROLE_CLINIC_STAFF, ROLE_PATIENT
from clinic_queue.utils.decorators import Actor

# 2024-03-04 is a Monday (weekday 0)
MONDAY = datetime(2024, 3, 4)


def at(hour, minute=0, day=MONDAY):
    return day.replace(hour=hour, minute=minute)


@pytest.fixture
def app(tmp_path):
    """App bound to a throwaway SQLite file (threads get their own connections)."""
    app = create_app('testing', {
        'SQLALCHEMY_DATABASE_URI': f"sqlite:///{tmp_path / 'queue.db'}",
        'SQLALCHEMY_ENGINE_OPTIONS': {'connect_args': {'check_same_thread': False, 'timeout': 30}},
    })
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _make_user(mobile_number, full_name, role):
    user = User(mobile_number=mobile_number, full_name=full_name, role=role)
    user.set_password('secret123')
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def patient(app):
    return _make_user('9876543210', 'Asha Patient', ROLE_PATIENT)


@pytest.fixture
def other_patient(app):
    return _make_user('9876500000', 'Ravi Patient', ROLE_PATIENT)


@pytest.fixture
def staff(app):
    return _make_user('9000000001', 'Front Desk', ROLE_CLINIC_STAFF)


@pytest.fixture
def patient_actor(patient):
    return Actor(user_id=patient.id, role=ROLE_PATIENT)


@pytest.fixture
def staff_actor(staff):
    return Actor(user_id=staff.id, role=ROLE_CLINIC_STAFF)


@pytest.fixture
def make_doctor_clinic(app):
    """
    Factory: a doctor at a clinic with weekly windows.

    windows: iterable of (day_of_week, start, end, max_patients)
    """
    def _create(name='Dr. Sarah Johnson', specialty='General Medicine',
                clinic_name='City Care Clinic', latitude=0.0, longitude=0.0,
                windows=((0, time(9, 0), time(12, 0), 2),), is_available=True):
        doctor = Doctor(name=name, specialty=specialty, experience=10)
        clinic = Clinic(name=clinic_name, address='1 Main Street', latitude=latitude, longitude=longitude)
        db.session.add_all([doctor, clinic])
        db.session.flush()
        doctor_clinic = DoctorClinic(
            doctor_id=doctor.id,
            clinic_id=clinic.id,
            is_available=is_available,
            has_arrived=False,
            current_token=0,
        )
        db.session.add(doctor_clinic)
        db.session.flush()
        for day_of_week, start, end, max_patients in windows:
            db.session.add(ConsultingHours(
                doctor_clinic_id=doctor_clinic.id,
                day_of_week=day_of_week,
                start_time=start,
                end_time=end,
                max_patients=max_patients,
            ))
        db.session.commit()
        return doctor_clinic
    return _create


@pytest.fixture
def doctor_clinic(make_doctor_clinic):
    """Monday 09:00-12:00, max 2 patients."""
    return make_doctor_clinic()


def auth_headers(user):
    token = create_access_token(identity=str(user.id), additional_claims={'role': user.role})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def patient_headers(patient):
    return auth_headers(patient)


@pytest.fixture
def staff_headers(staff):
    return auth_headers(staff)
