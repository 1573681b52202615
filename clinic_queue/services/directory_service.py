"""
Doctor directory reads and distance search.
Pure queries; nothing here writes.
"""
import math
from typing import Any, Dict, List, Optional

from sqlalchemy import or_

from clinic_queue.errors import NotFound, ValidationFailed
from clinic_queue.extensions import db
from clinic_queue.models import Clinic, Doctor, DoctorClinic

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))


def _validate_coordinates(latitude, longitude, max_distance_km):
    if (latitude is None) != (longitude is None):
        raise ValidationFailed('latitude and longitude must be supplied together')
    for name, value in (('latitude', latitude), ('longitude', longitude), ('max_distance_km', max_distance_km)):
        if value is not None and not math.isfinite(value):
            raise ValidationFailed(f'{name} must be a finite number', details={name: str(value)})
    if latitude is not None:
        if not -90 <= latitude <= 90:
            raise ValidationFailed('latitude must be between -90 and 90', details={'latitude': latitude})
        if not -180 <= longitude <= 180:
            raise ValidationFailed('longitude must be between -180 and 180', details={'longitude': longitude})
    if max_distance_km is not None and max_distance_km < 0:
        raise ValidationFailed('max_distance_km must be >= 0', details={'max_distance_km': max_distance_km})


def search_doctors(latitude: Optional[float] = None, longitude: Optional[float] = None,
                   max_distance_km: Optional[float] = None, specialty: Optional[str] = None,
                   query: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    One result per doctor-clinic pairing, nearest first.

    Distance is 0 for every result when no coordinates are given, and
    max_distance_km only applies together with coordinates.
    """
    _validate_coordinates(latitude, longitude, max_distance_km)

    rows = (
        db.session.query(DoctorClinic, Doctor, Clinic)
        .join(Doctor, DoctorClinic.doctor_id == Doctor.id)
        .join(Clinic, DoctorClinic.clinic_id == Clinic.id)
    )
    if specialty:
        rows = rows.filter(Doctor.specialty.ilike(f'%{specialty.strip()}%'))
    if query:
        pattern = f'%{query.strip()}%'
        rows = rows.filter(or_(Doctor.name.ilike(pattern), Doctor.specialty.ilike(pattern)))

    results = []
    for doctor_clinic, doctor, clinic in rows.all():
        if latitude is not None:
            distance = haversine_km(latitude, longitude, clinic.latitude, clinic.longitude)
            if max_distance_km is not None and distance > max_distance_km:
                continue
        else:
            distance = 0.0

        entry = doctor.to_dict()
        entry.update({
            'doctor_clinic_id': doctor_clinic.id,
            'clinic_id': clinic.id,
            'clinic_name': clinic.name,
            'clinic_address': clinic.address,
            'distance': round(distance, 2),
            'is_available': doctor_clinic.is_available,
            'has_arrived': doctor_clinic.has_arrived,
            'current_token': doctor_clinic.current_token,
        })
        results.append(entry)

    results.sort(key=lambda r: (r['distance'], r['name'], r['doctor_clinic_id']))
    return results


def list_doctors() -> List[Doctor]:
    return Doctor.query.order_by(Doctor.name.asc()).all()


def get_doctor(doctor_id: int) -> Dict[str, Any]:
    """Doctor with every clinic pairing and its live status."""
    doctor = db.session.get(Doctor, doctor_id)
    if doctor is None:
        raise NotFound(f'Doctor {doctor_id} not found')
    data = doctor.to_dict()
    data['clinics'] = [dc.to_dict() for dc in doctor.doctor_clinics.order_by(DoctorClinic.id.asc())]
    return data
