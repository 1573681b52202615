from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required

from clinic_queue.errors import ValidationFailed
from clinic_queue.models.user import ROLE_CLINIC_STAFF
from clinic_queue.services.booking_service import (
    appointment_to_dict,
    book,
    get_appointment as fetch_appointment,
    list_appointments as fetch_appointments,
)
from clinic_queue.services.lifecycle_service import update_status
from clinic_queue.utils.decorators import current_actor, require_role
from clinic_queue.utils.time_utils import parse_appointment_time

appointment_bp = Blueprint('appointment', __name__, url_prefix='/api/appointments')


def _int_field(data, field, required=False):
    """Returns (value, error_response)."""
    value = data.get(field)
    if value is None:
        if required:
            return None, (jsonify({'success': False, 'error': f'Field "{field}" is required'}), 400)
        return None, None
    if isinstance(value, bool) or not isinstance(value, int):
        return None, (jsonify({'success': False, 'error': f'Field "{field}" must be an integer'}), 400)
    return value, None


@appointment_bp.route('', methods=['POST'])
@jwt_required()
def create_appointment():
    """
    Book an appointment and receive a token number.
    Body: { doctor_clinic_id, appointment_time (ISO-8601, optional), patient_id (staff only) }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    doctor_clinic_id, error = _int_field(data, 'doctor_clinic_id', required=True)
    if error:
        return error
    patient_id, error = _int_field(data, 'patient_id')
    if error:
        return error

    appointment_time = parse_appointment_time(data.get('appointment_time'))

    appointment = book(
        current_actor(),
        doctor_clinic_id,
        appointment_time=appointment_time,
        patient_id=patient_id,
    )

    return jsonify({
        'success': True,
        'data': appointment_to_dict(appointment),
        'message': f'Appointment booked. Your token number is {appointment.token_number}'
    }), 201


@appointment_bp.route('', methods=['GET'])
@jwt_required()
def list_appointments():
    """
    List a patient's appointments, newest first.
    Query params:
        patient_id: defaults to the caller; required for staff
    """
    actor = current_actor()
    patient_id = request.args.get('patient_id', type=int)
    if patient_id is None:
        if actor.is_staff:
            raise ValidationFailed('Query parameter "patient_id" is required for clinic staff')
        patient_id = actor.user_id

    return jsonify({
        'success': True,
        'data': fetch_appointments(actor, patient_id)
    }), 200


@appointment_bp.route('/<int:appointment_id>', methods=['GET'])
@jwt_required()
def get_appointment(appointment_id):
    """Get a single appointment with doctor, clinic and current token."""
    appointment = fetch_appointment(current_actor(), appointment_id)
    return jsonify({
        'success': True,
        'data': appointment_to_dict(appointment)
    }), 200


@appointment_bp.route('/<int:appointment_id>/status', methods=['PUT'])
@jwt_required()
@require_role(ROLE_CLINIC_STAFF)
def update_appointment_status(appointment_id):
    """
    Update appointment status
    Access: clinic_staff
    Status values: scheduled, in_progress, completed, cancelled
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    new_status = data.get('status')
    if not new_status:
        return jsonify({
            'success': False,
            'error': 'Field "status" is required'
        }), 400

    appointment = update_status(current_actor(), appointment_id, new_status)

    return jsonify({
        'success': True,
        'data': appointment_to_dict(appointment),
        'message': f'Appointment status updated to {appointment.status}'
    }), 200
