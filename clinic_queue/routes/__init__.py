from .auth import auth_bp
from .appointment import appointment_bp
from .doctor import doctor_bp
from .doctor_clinic import doctor_clinic_bp
from .health import health_bp

__all__ = ['auth_bp', 'appointment_bp', 'doctor_bp', 'doctor_clinic_bp', 'health_bp']
