from datetime import time

import pytest

from clinic_queue.errors import NotFound, ValidationFailed
from clinic_queue.services.consulting_hours_service import weekly_schedule, windows_for
from clinic_queue.services.directory_service import get_doctor, haversine_km, search_doctors


def test_haversine_same_point_is_zero():
    assert haversine_km(12.97, 77.59, 12.97, 77.59) == 0


def test_haversine_one_degree_on_the_equator():
    assert haversine_km(0, 0, 0, 1) == pytest.approx(111.195, abs=0.01)


def test_haversine_is_symmetric():
    delhi_to_mumbai = haversine_km(28.6139, 77.2090, 19.0760, 72.8777)
    assert delhi_to_mumbai == pytest.approx(haversine_km(19.0760, 72.8777, 28.6139, 77.2090))
    assert delhi_to_mumbai == pytest.approx(1150, rel=0.02)


@pytest.fixture
def spread_out(make_doctor_clinic):
    """Clinics at 0, ~333.6 and ~556 km east of the origin."""
    far = make_doctor_clinic(name='Dr. Far', specialty='Dermatology', clinic_name='Far', longitude=5.0)
    near = make_doctor_clinic(name='Dr. Near', specialty='Cardiology', clinic_name='Near', longitude=0.0)
    middle = make_doctor_clinic(name='Dr. Middle', specialty='Cardiology', clinic_name='Middle', longitude=3.0)
    return near, middle, far


def test_search_orders_by_distance_and_filters_radius(spread_out):
    near, middle, _ = spread_out

    results = search_doctors(latitude=0.0, longitude=0.0, max_distance_km=500)

    assert [r['doctor_clinic_id'] for r in results] == [near.id, middle.id]
    assert results[0]['distance'] == 0
    assert results[1]['distance'] == pytest.approx(333.58, abs=0.02)


def test_search_without_coordinates_returns_everything(spread_out):
    results = search_doctors(max_distance_km=1)

    assert len(results) == 3
    assert {r['distance'] for r in results} == {0}
    assert [r['name'] for r in results] == ['Dr. Far', 'Dr. Middle', 'Dr. Near']


def test_search_by_specialty_and_query(spread_out):
    cardiology = search_doctors(specialty='cardio')
    assert {r['name'] for r in cardiology} == {'Dr. Near', 'Dr. Middle'}

    by_name = search_doctors(query='far')
    assert [r['name'] for r in by_name] == ['Dr. Far']


def test_search_results_carry_live_status(spread_out):
    result = search_doctors(query='Near')[0]
    assert result['clinic_name'] == 'Near'
    assert result['is_available'] is True
    assert result['has_arrived'] is False
    assert result['current_token'] == 0


@pytest.mark.parametrize('kwargs', [
    {'latitude': 10.0},
    {'latitude': 91.0, 'longitude': 0.0},
    {'latitude': 0.0, 'longitude': -181.0},
    {'latitude': 0.0, 'longitude': 0.0, 'max_distance_km': -5},
])
def test_search_rejects_bad_coordinates(app, kwargs):
    with pytest.raises(ValidationFailed):
        search_doctors(**kwargs)


def test_get_doctor_lists_clinics(doctor_clinic):
    data = get_doctor(doctor_clinic.doctor_id)
    assert data['name'] == 'Dr. Sarah Johnson'
    assert [c['id'] for c in data['clinics']] == [doctor_clinic.id]

    with pytest.raises(NotFound):
        get_doctor(999)


def test_consulting_windows(make_doctor_clinic):
    doctor_clinic = make_doctor_clinic(windows=(
        (2, time(17, 0), time(20, 0), 10),
        (0, time(9, 0), time(12, 0), 5),
        (0, time(6, 0), time(8, 0), 5),
    ))

    monday = windows_for(doctor_clinic.id, 0)
    assert [w.start_time for w in monday] == [time(6, 0), time(9, 0)]
    assert windows_for(doctor_clinic.id, 6) == []

    schedule = [w.to_dict() for w in weekly_schedule(doctor_clinic.id)]
    assert [(w['day_name'], w['start_time']) for w in schedule] == [
        ('Monday', '06:00'),
        ('Monday', '09:00'),
        ('Wednesday', '17:00'),
    ]

    with pytest.raises(NotFound):
        weekly_schedule(999)


@pytest.mark.parametrize('kwargs', [
    {'latitude': 0.0, 'longitude': 0.0, 'max_distance_km': float('nan')},
    {'latitude': 0.0, 'longitude': 0.0, 'max_distance_km': float('inf')},
    {'latitude': float('nan'), 'longitude': 0.0},
])
def test_search_rejects_non_finite_values(spread_out, kwargs):
    with pytest.raises(ValidationFailed):
        search_doctors(**kwargs)
