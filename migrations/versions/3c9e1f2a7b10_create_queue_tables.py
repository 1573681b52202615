"""Create users, directory, consulting hours and appointments tables

Revision ID: 3c9e1f2a7b10
Revises:
Create Date: 2026-10-18 09:00:00

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c9e1f2a7b10'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    """Create queue schema matching the models."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('mobile_number', sa.String(length=20), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('full_name', sa.String(length=120), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='patient'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_users_mobile_number'), ['mobile_number'], unique=True)
        batch_op.create_index(batch_op.f('ix_users_role'), ['role'], unique=False)

    op.create_table(
        'doctors',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('specialty', sa.String(length=100), nullable=False),
        sa.Column('experience', sa.Integer(), nullable=True),
        sa.Column('image_url', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    with op.batch_alter_table('doctors', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_doctors_specialty'), ['specialty'], unique=False)

    op.create_table(
        'clinics',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=20), nullable=True),
        sa.Column('latitude', sa.Float(), nullable=False),
        sa.Column('longitude', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True, server_default=sa.func.now()),
    )

    op.create_table(
        'doctor_clinics',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('doctor_id', sa.Integer(), sa.ForeignKey('doctors.id'), nullable=False),
        sa.Column('clinic_id', sa.Integer(), sa.ForeignKey('clinics.id'), nullable=False),
        sa.Column('is_available', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('has_arrived', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('current_token', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('doctor_id', 'clinic_id', name='uq_doctor_clinic_pair'),
        sa.CheckConstraint('current_token >= 0', name='ck_doctor_clinic_current_token'),
    )
    with op.batch_alter_table('doctor_clinics', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_doctor_clinics_doctor_id'), ['doctor_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_doctor_clinics_clinic_id'), ['clinic_id'], unique=False)

    op.create_table(
        'consulting_hours',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('doctor_clinic_id', sa.Integer(), sa.ForeignKey('doctor_clinics.id'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.Time(), nullable=False),
        sa.Column('end_time', sa.Time(), nullable=False),
        sa.Column('max_patients', sa.Integer(), nullable=False),
        sa.CheckConstraint('start_time < end_time', name='ck_consulting_hours_window'),
        sa.CheckConstraint('max_patients > 0', name='ck_consulting_hours_max_patients'),
        sa.CheckConstraint('day_of_week >= 0 AND day_of_week <= 6', name='ck_consulting_hours_day'),
    )
    with op.batch_alter_table('consulting_hours', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_consulting_hours_doctor_clinic_id'), ['doctor_clinic_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_consulting_hours_day_of_week'), ['day_of_week'], unique=False)

    op.create_table(
        'appointments',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('patient_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False),
        sa.Column('doctor_clinic_id', sa.Integer(), sa.ForeignKey('doctor_clinics.id'), nullable=False),
        sa.Column('token_number', sa.Integer(), nullable=False),
        sa.Column('appointment_time', sa.DateTime(), nullable=False),
        sa.Column('appointment_day', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='scheduled'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('doctor_clinic_id', 'appointment_day', 'token_number', name='uq_appointment_daily_token'),
        sa.CheckConstraint('token_number > 0', name='ck_appointment_token_positive'),
    )
    with op.batch_alter_table('appointments', schema=None) as batch_op:
        batch_op.create_index(batch_op.f('ix_appointments_patient_id'), ['patient_id'], unique=False)
        batch_op.create_index(batch_op.f('ix_appointments_status'), ['status'], unique=False)
        batch_op.create_index('ix_appointments_doctor_clinic_day', ['doctor_clinic_id', 'appointment_day'], unique=False)


def downgrade():
    """Drop queue schema."""
    with op.batch_alter_table('appointments', schema=None) as batch_op:
        batch_op.drop_index('ix_appointments_doctor_clinic_day')
        batch_op.drop_index(batch_op.f('ix_appointments_status'))
        batch_op.drop_index(batch_op.f('ix_appointments_patient_id'))
    op.drop_table('appointments')

    with op.batch_alter_table('consulting_hours', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_consulting_hours_day_of_week'))
        batch_op.drop_index(batch_op.f('ix_consulting_hours_doctor_clinic_id'))
    op.drop_table('consulting_hours')

    with op.batch_alter_table('doctor_clinics', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_doctor_clinics_clinic_id'))
        batch_op.drop_index(batch_op.f('ix_doctor_clinics_doctor_id'))
    op.drop_table('doctor_clinics')

    op.drop_table('clinics')

    with op.batch_alter_table('doctors', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_doctors_specialty'))
    op.drop_table('doctors')

    with op.batch_alter_table('users', schema=None) as batch_op:
        batch_op.drop_index(batch_op.f('ix_users_role'))
        batch_op.drop_index(batch_op.f('ix_users_mobile_number'))
    op.drop_table('users')
