from flask import Blueprint, request, jsonify, current_app

from clinic_queue.errors import ValidationFailed
from clinic_queue.services.directory_service import get_doctor as fetch_doctor
from clinic_queue.services.directory_service import list_doctors as fetch_doctors
from clinic_queue.services.directory_service import search_doctors as run_search

doctor_bp = Blueprint('doctor', __name__, url_prefix='/api/doctors')


def _float_arg(name):
    raw = request.args.get(name)
    if raw is None or raw == '':
        return None
    try:
        return float(raw)
    except ValueError:
        raise ValidationFailed(f'Query parameter "{name}" must be a number', details={name: raw})


@doctor_bp.route('', methods=['GET'])
def list_doctors():
    """List every doctor in the directory."""
    return jsonify({
        'success': True,
        'data': [d.to_dict() for d in fetch_doctors()]
    }), 200


@doctor_bp.route('/search', methods=['GET'])
def search_doctors():
    """
    Search doctor-clinic pairings, nearest first.
    Query params:
        latitude, longitude: caller position (optional, together)
        max_distance_km: radius filter, only with coordinates
        specialty: case-insensitive substring
        q: matches doctor name or specialty
    """
    latitude = _float_arg('latitude')
    longitude = _float_arg('longitude')
    max_distance_km = _float_arg('max_distance_km')
    if max_distance_km is None and latitude is not None:
        max_distance_km = current_app.config.get('SEARCH_DEFAULT_MAX_DISTANCE_KM')

    results = run_search(
        latitude=latitude,
        longitude=longitude,
        max_distance_km=max_distance_km,
        specialty=request.args.get('specialty') or None,
        query=request.args.get('q') or None,
    )
    return jsonify({
        'success': True,
        'data': results,
        'count': len(results)
    }), 200


@doctor_bp.route('/<int:doctor_id>', methods=['GET'])
def get_doctor(doctor_id):
    """Doctor profile with clinic pairings and live status."""
    return jsonify({
        'success': True,
        'data': fetch_doctor(doctor_id)
    }), 200
