from flask import Blueprint, request, jsonify
from flask_jwt_extended import (
    create_access_token,
    jwt_required,
    get_jwt_identity,
)
from clinic_queue.models import User
from clinic_queue.models.user import ROLE_PATIENT
from clinic_queue.extensions import db
import logging
import re

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

MOBILE_NUMBER_RE = re.compile(r'^\d{10}$')


def _issue_token(user):
    # Identity is the user id (string for the JWT "sub" claim); role travels as a claim
    return create_access_token(
        identity=str(user.id),
        additional_claims={'role': user.role},
    )


@auth_bp.route('/register', methods=['POST'])
def register():
    """
    Register a patient account.
    Body: { mobile_number, password, full_name }
    Clinic staff accounts are created with `flask create-staff`.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    mobile_number = str(data.get('mobile_number') or '').strip()
    password = data.get('password') or ''
    full_name = str(data.get('full_name') or '').strip()

    if not MOBILE_NUMBER_RE.match(mobile_number):
        return jsonify({
            'success': False,
            'error': 'Please enter a valid 10-digit mobile number'
        }), 400
    if len(full_name) < 2:
        return jsonify({
            'success': False,
            'error': 'Name must be at least 2 characters'
        }), 400
    if not isinstance(password, str) or len(password) < 6:
        return jsonify({
            'success': False,
            'error': 'Password must be at least 6 characters'
        }), 400

    if User.query.filter_by(mobile_number=mobile_number).first():
        return jsonify({
            'success': False,
            'error': 'Mobile number already registered'
        }), 400

    user = User(mobile_number=mobile_number, full_name=full_name, role=ROLE_PATIENT)
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info("Registered patient %s", user.id)

    return jsonify({
        'success': True,
        'data': user.to_dict(),
        'access_token': _issue_token(user),
        'token_type': 'bearer'
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login endpoint - authenticates a user and returns a JWT access token"""
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    mobile_number = data.get('mobile_number')
    password = data.get('password')

    if not isinstance(mobile_number, str) or not isinstance(password, str) or not mobile_number or not password:
        return jsonify({
            'success': False,
            'error': 'Mobile number and password required'
        }), 400

    user = User.query.filter_by(mobile_number=mobile_number).first()

    if not user or not user.check_password(password):
        return jsonify({
            'success': False,
            'error': 'Invalid mobile number or password'
        }), 401

    if not user.is_active:
        return jsonify({
            'success': False,
            'error': 'Account is deactivated'
        }), 403

    return jsonify({
        'success': True,
        'data': user.to_dict(),
        'access_token': _issue_token(user),
        'token_type': 'bearer'
    }), 200


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def get_current_user():
    """Get current logged-in user information using JWT"""
    user = db.session.get(User, int(get_jwt_identity()))

    if not user:
        return jsonify({'success': False, 'error': 'User not found'}), 404

    return jsonify({
        'success': True,
        'data': user.to_dict()
    }), 200
