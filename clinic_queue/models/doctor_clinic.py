"""
DoctorClinic Model
One doctor's practice at one clinic. Carries the live queue state staff edit
during the day: availability, arrival and the "now serving" token.
"""
from clinic_queue.extensions import db
from .base import TimestampMixin


class DoctorClinic(db.Model, TimestampMixin):
    __tablename__ = 'doctor_clinics'
    __table_args__ = (
        db.UniqueConstraint('doctor_id', 'clinic_id', name='uq_doctor_clinic_pair'),
        db.CheckConstraint('current_token >= 0', name='ck_doctor_clinic_current_token'),
    )

    id = db.Column(db.Integer, primary_key=True)
    doctor_id = db.Column(db.Integer, db.ForeignKey('doctors.id'), nullable=False, index=True)
    clinic_id = db.Column(db.Integer, db.ForeignKey('clinics.id'), nullable=False, index=True)

    is_available = db.Column(db.Boolean, default=True, nullable=False)
    has_arrived = db.Column(db.Boolean, default=False, nullable=False)
    current_token = db.Column(db.Integer, default=0, nullable=False)

    consulting_hours = db.relationship('ConsultingHours', backref='doctor_clinic', lazy='dynamic')
    appointments = db.relationship('Appointment', backref='doctor_clinic', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'doctor_id': self.doctor_id,
            'clinic_id': self.clinic_id,
            'doctor_name': self.doctor.name if self.doctor else None,
            'clinic_name': self.clinic.name if self.clinic else None,
            'is_available': self.is_available,
            'has_arrived': self.has_arrived,
            'current_token': self.current_token,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<DoctorClinic {self.id} doctor={self.doctor_id} clinic={self.clinic_id}>"
