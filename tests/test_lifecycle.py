import pytest

from clinic_queue.errors import InvalidTransition, NotFound, Unauthorized, ValidationFailed
from clinic_queue.services.booking_service import book
from clinic_queue.services.lifecycle_service import can_transition, update_status

from conftest import at


@pytest.mark.parametrize('current, intended, allowed', [
    ('scheduled', 'in_progress', True),
    ('scheduled', 'cancelled', True),
    ('scheduled', 'completed', False),
    ('in_progress', 'completed', True),
    ('in_progress', 'cancelled', True),
    ('in_progress', 'scheduled', False),
    ('completed', 'cancelled', False),
    ('cancelled', 'scheduled', False),
    ('scheduled', 'scheduled', False),
])
def test_transition_table(current, intended, allowed):
    assert can_transition(current, intended) is allowed


@pytest.fixture
def appointment(doctor_clinic, patient_actor):
    return book(patient_actor, doctor_clinic.id, at(9, 0))


def test_full_visit(appointment, staff_actor):
    assert update_status(staff_actor, appointment.id, 'in_progress').status == 'in_progress'
    assert update_status(staff_actor, appointment.id, 'completed').status == 'completed'


def test_terminal_status_is_final(appointment, staff_actor):
    update_status(staff_actor, appointment.id, 'cancelled')

    with pytest.raises(InvalidTransition) as excinfo:
        update_status(staff_actor, appointment.id, 'in_progress')

    assert excinfo.value.details == {'from': 'cancelled', 'to': 'in_progress'}


def test_skipping_in_progress_is_rejected(appointment, staff_actor):
    with pytest.raises(InvalidTransition):
        update_status(staff_actor, appointment.id, 'completed')
    assert appointment.status == 'scheduled'


def test_unknown_status_value(appointment, staff_actor):
    with pytest.raises(ValidationFailed):
        update_status(staff_actor, appointment.id, 'no_show')


def test_patient_cannot_change_status(appointment, patient_actor):
    with pytest.raises(Unauthorized):
        update_status(patient_actor, appointment.id, 'cancelled')


def test_unknown_appointment(app, staff_actor):
    with pytest.raises(NotFound):
        update_status(staff_actor, 12345, 'cancelled')
