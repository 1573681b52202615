from clinic_queue.extensions import db, bcrypt
from .base import TimestampMixin

ROLE_PATIENT = 'patient'
ROLE_CLINIC_STAFF = 'clinic_staff'
ROLES = (ROLE_PATIENT, ROLE_CLINIC_STAFF)


class User(db.Model, TimestampMixin):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    mobile_number = db.Column(db.String(20), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    full_name = db.Column(db.String(120), nullable=False)

    # Role - only 2 options: 'patient', 'clinic_staff'
    role = db.Column(db.String(20), nullable=False, default=ROLE_PATIENT, index=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    appointments = db.relationship('Appointment', backref='patient', lazy='dynamic')

    def set_password(self, password):
        """Hash and set password"""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if provided password matches hash"""
        return bcrypt.check_password_hash(self.password_hash, password)

    def is_clinic_staff(self):
        return self.role == ROLE_CLINIC_STAFF

    def to_dict(self):
        return {
            'id': self.id,
            'mobile_number': self.mobile_number,
            'full_name': self.full_name,
            'role': self.role,
            'is_active': self.is_active,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<User {self.mobile_number} ({self.full_name}) - {self.role}>"
