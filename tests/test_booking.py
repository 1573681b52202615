from datetime import time

import pytest

from clinic_queue.errors import (
    CapacityExceeded,
    NotFound,
    NoWindow,
    OutsideWindow,
    Unauthorized,
    Unavailable,
    ValidationFailed,
)
from clinic_queue.extensions import db
from clinic_queue.models import Appointment
from clinic_queue.services import booking_service
from clinic_queue.services.booking_service import book, get_appointment, list_appointments
from clinic_queue.services.lifecycle_service import update_status

from conftest import MONDAY, at


def _appointment_count():
    return Appointment.query.count()


def test_first_two_bookings_get_tokens_one_and_two(doctor_clinic, patient_actor):
    first = book(patient_actor, doctor_clinic.id, at(9, 0))
    second = book(patient_actor, doctor_clinic.id, at(10, 30))

    assert first.token_number == 1
    assert second.token_number == 2
    assert first.status == 'scheduled'
    assert first.appointment_day == MONDAY.date()
    assert first.patient_id == patient_actor.user_id


def test_window_bounds_are_inclusive(doctor_clinic, patient_actor):
    assert book(patient_actor, doctor_clinic.id, at(9, 0)).token_number == 1
    assert book(patient_actor, doctor_clinic.id, at(12, 0)).token_number == 2


def test_full_window_raises_capacity_exceeded(doctor_clinic, patient_actor):
    book(patient_actor, doctor_clinic.id, at(9, 0))
    book(patient_actor, doctor_clinic.id, at(9, 15))

    with pytest.raises(CapacityExceeded) as excinfo:
        book(patient_actor, doctor_clinic.id, at(11, 0))

    assert excinfo.value.details == {
        'date': '2024-03-04',
        'max_patients': 2,
        'booked': 2,
        'start_time': '09:00',
        'end_time': '12:00',
    }
    assert _appointment_count() == 2


def test_time_outside_window_lists_the_days_windows(doctor_clinic, patient_actor):
    with pytest.raises(OutsideWindow) as excinfo:
        book(patient_actor, doctor_clinic.id, at(13, 0))

    details = excinfo.value.details
    assert details['requested_time'] == '13:00'
    assert details['windows'] == [{'start_time': '09:00', 'end_time': '12:00'}]
    assert _appointment_count() == 0


def test_day_without_window_raises_no_window(doctor_clinic, patient_actor):
    tuesday = MONDAY.replace(day=5, hour=10)

    with pytest.raises(NoWindow) as excinfo:
        book(patient_actor, doctor_clinic.id, tuesday)

    assert excinfo.value.details['day_name'] == 'Tuesday'
    assert _appointment_count() == 0


def test_unavailable_doctor_rejects_booking(make_doctor_clinic, patient_actor):
    doctor_clinic = make_doctor_clinic(is_available=False)

    with pytest.raises(Unavailable):
        book(patient_actor, doctor_clinic.id, at(9, 30))

    assert _appointment_count() == 0


def test_unknown_doctor_clinic_raises_not_found(app, patient_actor):
    with pytest.raises(NotFound):
        book(patient_actor, 999, at(9, 30))


def test_availability_checked_before_hours(make_doctor_clinic, patient_actor):
    doctor_clinic = make_doctor_clinic(is_available=False)

    # Sunday has no window, but the doctor is unavailable first
    with pytest.raises(Unavailable):
        book(patient_actor, doctor_clinic.id, MONDAY.replace(day=10, hour=10))


def test_capacity_is_counted_per_window(make_doctor_clinic, patient_actor):
    doctor_clinic = make_doctor_clinic(windows=(
        (0, time(9, 0), time(12, 0), 1),
        (0, time(17, 0), time(19, 0), 1),
    ))

    morning = book(patient_actor, doctor_clinic.id, at(10, 0))
    evening = book(patient_actor, doctor_clinic.id, at(18, 0))

    # tokens run across the whole day, not per window
    assert (morning.token_number, evening.token_number) == (1, 2)
    with pytest.raises(CapacityExceeded):
        book(patient_actor, doctor_clinic.id, at(18, 30))


def test_cancelled_appointments_hold_capacity_by_default(doctor_clinic, patient_actor, staff_actor):
    first = book(patient_actor, doctor_clinic.id, at(9, 0))
    book(patient_actor, doctor_clinic.id, at(9, 10))
    update_status(staff_actor, first.id, 'cancelled')

    with pytest.raises(CapacityExceeded):
        book(patient_actor, doctor_clinic.id, at(9, 20))


def test_cancelled_appointments_release_capacity_when_configured(app, doctor_clinic, patient_actor, staff_actor):
    app.config['COUNT_CANCELLED_TOWARDS_CAPACITY'] = False
    first = book(patient_actor, doctor_clinic.id, at(9, 0))
    book(patient_actor, doctor_clinic.id, at(9, 10))
    update_status(staff_actor, first.id, 'cancelled')

    third = book(patient_actor, doctor_clinic.id, at(9, 20))

    # cancelled tokens are never reused
    assert third.token_number == 3


def test_missing_time_defaults_to_now(monkeypatch, doctor_clinic, patient_actor):
    monkeypatch.setattr(booking_service, 'clinic_now', lambda: at(10, 45))

    appointment = book(patient_actor, doctor_clinic.id)

    assert appointment.appointment_time == at(10, 45)
    assert appointment.token_number == 1


def test_patient_cannot_book_for_someone_else(doctor_clinic, patient_actor, other_patient):
    with pytest.raises(Unauthorized):
        book(patient_actor, doctor_clinic.id, at(9, 30), patient_id=other_patient.id)
    assert _appointment_count() == 0


def test_staff_books_on_behalf_of_patient(doctor_clinic, staff_actor, patient):
    appointment = book(staff_actor, doctor_clinic.id, at(9, 30), patient_id=patient.id)
    assert appointment.patient_id == patient.id


def test_staff_must_name_the_patient(doctor_clinic, staff_actor):
    with pytest.raises(ValidationFailed):
        book(staff_actor, doctor_clinic.id, at(9, 30))


def test_booking_for_unknown_patient(doctor_clinic, staff_actor):
    with pytest.raises(NotFound):
        book(staff_actor, doctor_clinic.id, at(9, 30), patient_id=4242)


def test_list_appointments_newest_first(doctor_clinic, patient_actor, other_patient):
    book(patient_actor, doctor_clinic.id, at(9, 0))
    book(patient_actor, doctor_clinic.id, MONDAY.replace(day=11, hour=9))

    listed = list_appointments(patient_actor, patient_actor.user_id)

    assert [a['appointment_time'] for a in listed] == ['2024-03-11T09:00:00', '2024-03-04T09:00:00']
    assert listed[0]['doctor_name'] == 'Dr. Sarah Johnson'
    assert listed[0]['clinic_name'] == 'City Care Clinic'
    assert listed[0]['current_token'] == 0
    assert list_appointments(patient_actor, patient_actor.user_id)[0]['token_number'] == 1

    with pytest.raises(Unauthorized):
        list_appointments(patient_actor, other_patient.id)


def test_get_appointment_is_scoped_to_owner(doctor_clinic, patient_actor, other_patient, staff_actor):
    from clinic_queue.utils.decorators import Actor

    appointment = book(patient_actor, doctor_clinic.id, at(9, 0))
    stranger = Actor(user_id=other_patient.id, role='patient')

    assert get_appointment(patient_actor, appointment.id).id == appointment.id
    assert get_appointment(staff_actor, appointment.id).id == appointment.id
    with pytest.raises(Unauthorized):
        get_appointment(stranger, appointment.id)
    with pytest.raises(NotFound):
        get_appointment(staff_actor, 9999)


def test_failed_booking_leaves_session_usable(doctor_clinic, patient_actor):
    with pytest.raises(OutsideWindow):
        book(patient_actor, doctor_clinic.id, at(7, 0))

    db.session.execute(db.select(Appointment)).all()
    assert book(patient_actor, doctor_clinic.id, at(9, 0)).token_number == 1
