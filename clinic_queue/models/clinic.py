"""
Clinic Model
A physical practice location; doctors consult there through DoctorClinic pairings.
"""
from datetime import datetime
from clinic_queue.extensions import db


class Clinic(db.Model):
    """Clinic directory entry with coordinates for distance search"""
    __tablename__ = 'clinics'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    address = db.Column(db.String(255))
    phone = db.Column(db.String(20))

    # WGS84 degrees
    latitude = db.Column(db.Float, nullable=False)
    longitude = db.Column(db.Float, nullable=False)

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    doctor_clinics = db.relationship('DoctorClinic', backref='clinic', lazy='dynamic')

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
            'phone': self.phone,
            'latitude': self.latitude,
            'longitude': self.longitude,
        }

    def __repr__(self):
        return f"<Clinic {self.id} {self.name}>"
