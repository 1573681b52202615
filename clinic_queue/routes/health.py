"""
Health check endpoints for monitoring and load balancers
"""
from flask import Blueprint, current_app, jsonify
from clinic_queue.extensions import db
from clinic_queue.services.token_allocator import has_daily_token_guard
from datetime import datetime
import logging

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__, url_prefix='/health')


@health_bp.route('', methods=['GET'])
@health_bp.route('/ping', methods=['GET'])
def health_check():
    """Basic health check - no database connection"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.utcnow().isoformat(),
        'service': 'clinic-queue'
    }), 200


@health_bp.route('/ready', methods=['GET'])
def readiness_check():
    """Readiness check - database connection and the daily token guard"""
    try:
        db.session.execute(db.text('SELECT 1'))
        db_status = 'connected'
        token_guard = 'present' if has_daily_token_guard() else 'missing'
    except Exception as e:
        logger.error("Readiness check failed: %s", e)
        db.session.rollback()
        db_status = f'error: {str(e)}'
        token_guard = 'unknown'

    # Without the unique constraint concurrent bookings could share a token
    ready = db_status == 'connected' and token_guard == 'present'
    return jsonify({
        'status': 'ready' if ready else 'not_ready',
        'database': db_status,
        'token_guard': token_guard,
        'clinic_timezone': current_app.config.get('CLINIC_TIMEZONE'),
        'timestamp': datetime.utcnow().isoformat()
    }), 200 if ready else 503



@health_bp.route('/live', methods=['GET'])
def liveness_check():
    """Liveness check for Kubernetes/containers"""
    return jsonify({
        'status': 'alive',
        'timestamp': datetime.utcnow().isoformat()
    }), 200
