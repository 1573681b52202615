from .user import User
from .doctor import Doctor
from .clinic import Clinic
from .doctor_clinic import DoctorClinic
from .consulting_hours import ConsultingHours
from .appointment import Appointment

__all__ = ["User", "Doctor", "Clinic", "DoctorClinic", "ConsultingHours", "Appointment"]
