from functools import wraps
from typing import NamedTuple

from flask import jsonify
from flask_jwt_extended import get_jwt_identity, get_jwt

from clinic_queue.errors import Unauthorized
from clinic_queue.extensions import db
from clinic_queue.models import User
from clinic_queue.models.user import ROLE_CLINIC_STAFF, ROLE_PATIENT


class Actor(NamedTuple):
    """Capability handed to every mutating service call."""
    user_id: int
    role: str

    @property
    def is_staff(self):
        return self.role == ROLE_CLINIC_STAFF

    @property
    def is_patient(self):
        return self.role == ROLE_PATIENT


def require_staff(actor, action='perform this action'):
    """Raise Unauthorized unless the actor carries the clinic-staff capability."""
    if actor is None or not actor.is_staff:
        raise Unauthorized(f'Only clinic staff may {action}')


def current_actor():
    """Build the Actor for the current JWT-authenticated request."""
    claims = get_jwt()
    return Actor(user_id=int(get_jwt_identity()), role=claims.get('role', ROLE_PATIENT))


def require_role(*roles):
    """
    Decorator to require specific roles
    Usage: @require_role('clinic_staff')
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            """
            Require that the current JWT-authenticated user has one of the given roles.
            Must be used together with @jwt_required() on the route.
            """
            try:
                user_id = int(get_jwt_identity())
            except (TypeError, ValueError):
                return jsonify({
                    'success': False,
                    'error': 'Authentication required'
                }), 401

            user = db.session.get(User, user_id)
            if not user or not user.is_active:
                return jsonify({
                    'success': False,
                    'error': 'Authentication required'
                }), 401

            if user.role not in roles:
                return jsonify({
                    'success': False,
                    'error': f'Permission denied. Required roles: {", ".join(roles)}',
                    'code': Unauthorized.code
                }), 403

            return f(*args, **kwargs)
        return decorated_function
    return decorator
