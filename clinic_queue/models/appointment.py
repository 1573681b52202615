from clinic_queue.extensions import db
from .base import TimestampMixin

STATUS_SCHEDULED = 'scheduled'
STATUS_IN_PROGRESS = 'in_progress'
STATUS_COMPLETED = 'completed'
STATUS_CANCELLED = 'cancelled'
APPOINTMENT_STATUSES = (STATUS_SCHEDULED, STATUS_IN_PROGRESS, STATUS_COMPLETED, STATUS_CANCELLED)


class Appointment(db.Model, TimestampMixin):
    __tablename__ = 'appointments'
    __table_args__ = (
        # One token number per doctor-clinic per calendar day
        db.UniqueConstraint('doctor_clinic_id', 'appointment_day', 'token_number', name='uq_appointment_daily_token'),
        db.CheckConstraint('token_number > 0', name='ck_appointment_token_positive'),
        db.Index('ix_appointments_doctor_clinic_day', 'doctor_clinic_id', 'appointment_day'),
    )

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    doctor_clinic_id = db.Column(db.Integer, db.ForeignKey('doctor_clinics.id'), nullable=False)

    token_number = db.Column(db.Integer, nullable=False)
    appointment_time = db.Column(db.DateTime, nullable=False)  # clinic-local wall clock
    appointment_day = db.Column(db.Date, nullable=False)  # appointment_time.date()

    # Status: scheduled, in_progress, completed, cancelled
    status = db.Column(db.String(20), nullable=False, default=STATUS_SCHEDULED, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'patient_id': self.patient_id,
            'doctor_clinic_id': self.doctor_clinic_id,
            'token_number': self.token_number,
            'appointment_time': self.appointment_time.isoformat() if self.appointment_time else None,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Appointment {self.id} token #{self.token_number} on {self.appointment_day} ({self.status})>"
