"""
Queue error taxonomy.

Services raise these; the app factory renders them as
{'success': False, 'error': ..., 'code': ..., 'details': ...}.
"""
from typing import Any, Dict, Optional


class QueueError(Exception):
    """Base class for admission, registry and lifecycle failures."""
    code = 'QUEUE_ERROR'
    status_code = 400
    retryable = False

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'success': False,
            'error': self.message,
            'code': self.code,
        }
        if self.details:
            payload['details'] = self.details
        if self.retryable:
            payload['retryable'] = True
        return payload


class ValidationFailed(QueueError):
    code = 'VALIDATION_FAILED'
    status_code = 400


class NotFound(QueueError):
    code = 'NOT_FOUND'
    status_code = 404


class Unavailable(QueueError):
    code = 'DOCTOR_UNAVAILABLE'
    status_code = 409


class NoWindow(QueueError):
    code = 'NO_CONSULTING_WINDOW'
    status_code = 422


class OutsideWindow(QueueError):
    code = 'OUTSIDE_CONSULTING_HOURS'
    status_code = 422


class CapacityExceeded(QueueError):
    code = 'CAPACITY_EXCEEDED'
    status_code = 409


class InvalidTransition(QueueError):
    code = 'INVALID_TRANSITION'
    status_code = 409


class Conflict(QueueError):
    """Token race survived every retry; the caller may resubmit."""
    code = 'TOKEN_CONFLICT'
    status_code = 409
    retryable = True


class Unauthorized(QueueError):
    code = 'UNAUTHORIZED'
    status_code = 403
