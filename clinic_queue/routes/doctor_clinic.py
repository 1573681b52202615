"""
Doctor-Clinic API Routes
Live queue state of one doctor at one clinic: status, current token and
consulting hours.
"""
from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from clinic_queue.models.user import ROLE_CLINIC_STAFF
from clinic_queue.services.consulting_hours_service import weekly_schedule
from clinic_queue.services.status_registry import set_current_token, set_status, status_of
from clinic_queue.utils.decorators import current_actor, require_role

doctor_clinic_bp = Blueprint('doctor_clinic', __name__, url_prefix='/api/doctor-clinics')


@doctor_clinic_bp.route('/<int:doctor_clinic_id>', methods=['GET'])
def get_status(doctor_clinic_id):
    """Availability, arrival and now-serving token."""
    return jsonify({
        'success': True,
        'data': status_of(doctor_clinic_id).to_dict()
    }), 200


@doctor_clinic_bp.route('/<int:doctor_clinic_id>/consulting-hours', methods=['GET'])
def get_consulting_hours(doctor_clinic_id):
    """Weekly consulting windows, Monday first."""
    return jsonify({
        'success': True,
        'data': [w.to_dict() for w in weekly_schedule(doctor_clinic_id)]
    }), 200


@doctor_clinic_bp.route('/<int:doctor_clinic_id>/status', methods=['PUT'])
@jwt_required()
@require_role(ROLE_CLINIC_STAFF)
def update_doctor_status(doctor_clinic_id):
    """
    Update availability / arrival
    Access: clinic_staff
    Body: { is_available: bool, has_arrived: bool }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    for field in ('is_available', 'has_arrived'):
        if field not in data:
            return jsonify({
                'success': False,
                'error': f'Field "{field}" is required'
            }), 400

    doctor_clinic = set_status(current_actor(), doctor_clinic_id, data['is_available'], data['has_arrived'])
    return jsonify({
        'success': True,
        'data': doctor_clinic.to_dict(),
        'message': 'Doctor status updated'
    }), 200


@doctor_clinic_bp.route('/<int:doctor_clinic_id>/token', methods=['PUT'])
@jwt_required()
@require_role(ROLE_CLINIC_STAFF)
def update_token(doctor_clinic_id):
    """
    Set the now-serving token
    Access: clinic_staff
    Body: { token_number: int >= 0 }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'token_number' not in data:
        return jsonify({
            'success': False,
            'error': 'Field "token_number" is required'
        }), 400

    doctor_clinic = set_current_token(current_actor(), doctor_clinic_id, data['token_number'])
    return jsonify({
        'success': True,
        'data': doctor_clinic.to_dict(),
        'message': f'Now serving token #{doctor_clinic.current_token}'
    }), 200
