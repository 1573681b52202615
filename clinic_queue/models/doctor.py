from clinic_queue.extensions import db
from .base import TimestampMixin


class Doctor(db.Model, TimestampMixin):
    __tablename__ = 'doctors'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)  # e.g., Dr. Sarah Johnson
    specialty = db.Column(db.String(100), nullable=False, index=True)  # e.g., Cardiology
    experience = db.Column(db.Integer, default=0)  # years
    image_url = db.Column(db.String(255))

    doctor_clinics = db.relationship('DoctorClinic', backref='doctor', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'specialty': self.specialty,
            'experience': self.experience,
            'image_url': self.image_url,
        }

    def __repr__(self):
        return f"<Doctor {self.name} ({self.specialty})>"
