from clinic_queue.models import ConsultingHours, Doctor, DoctorClinic, User
from clinic_queue.seeds import CLINICS, DOCTORS, PAIRINGS, create_staff_user, seed_directory


def test_seed_directory_runs_once(app):
    assert seed_directory() is True
    assert Doctor.query.count() == len(DOCTORS)
    assert DoctorClinic.query.count() == len(PAIRINGS)
    assert ConsultingHours.query.count() == sum(len(windows) for _, _, windows in PAIRINGS)

    assert seed_directory() is False
    assert Doctor.query.count() == len(DOCTORS)
    assert len(CLINICS) == 3


def test_create_staff_user_is_idempotent(app):
    user, created = create_staff_user('9000000009', 'Desk Two', 'staff123')
    assert created is True
    assert user.role == 'clinic_staff'
    assert user.check_password('staff123')

    again, created = create_staff_user('9000000009', 'Someone Else', 'other')
    assert created is False
    assert again.id == user.id


def test_cli_commands(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=['seed-directory'])
    assert 'Directory seeded.' in result.output

    result = runner.invoke(args=[
        'create-staff', '--mobile-number', '9000000010', '--full-name', 'Desk Three',
        '--password', 'staff123',
    ])
    assert 'Created clinic staff user' in result.output
    assert User.query.filter_by(mobile_number='9000000010').one().role == 'clinic_staff'
