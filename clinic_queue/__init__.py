from flask import Flask, jsonify, request
from sqlalchemy.exc import OperationalError
from werkzeug.exceptions import HTTPException
from .extensions import db, migrate, bcrypt, jwt
from .errors import QueueError
import click
import logging
import os

# Setup basic logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config_name=None, config_overrides=None):
    """Create Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    from clinic_queue.config import config, get_config
    config_class = config.get(config_name, config['default']) if config_name else get_config()
    if hasattr(config_class, 'validate'):
        config_class.validate()
    app.config.from_object(config_class)
    if config_overrides:
        app.config.update(config_overrides)

    # Ensure production mode if FLASK_ENV is production
    if os.getenv('FLASK_ENV') == 'production':
        app.config['DEBUG'] = False
        app.config['TESTING'] = False

    logging.getLogger().setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions first (before error handlers)
    db.init_app(app)
    migrate.init_app(app, db)
    bcrypt.init_app(app)
    jwt.init_app(app)

    # Initialize CORS
    from clinic_queue.utils.cors import init_cors
    init_cors(app)

    register_error_handlers(app)
    register_jwt_handlers()

    # Setup logging
    if not app.debug and not app.testing:
        from logging.handlers import RotatingFileHandler

        log_dir = os.path.dirname(app.config['LOG_FILE'])
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = RotatingFileHandler(
            app.config['LOG_FILE'],
            maxBytes=10240000,
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)
        app.logger.setLevel(logging.INFO)
        app.logger.info('Application startup')

    # Security headers middleware
    @app.after_request
    def set_security_headers(response):
        """Add security headers to all responses"""
        if not app.debug:
            response.headers['X-Content-Type-Options'] = 'nosniff'
            response.headers['X-Frame-Options'] = 'DENY'
            response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
            # Only add HSTS if using HTTPS
            if request.is_secure:
                response.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'
        return response

    # Import models to register them with SQLAlchemy
    with app.app_context():
        from . import models  # noqa: F401

    # Register blueprints
    from .routes import auth_bp, appointment_bp, doctor_bp, doctor_clinic_bp, health_bp
    app.register_blueprint(health_bp)  # Register health check first
    app.register_blueprint(auth_bp)
    app.register_blueprint(appointment_bp)
    app.register_blueprint(doctor_bp)
    app.register_blueprint(doctor_clinic_bp)

    register_cli(app)

    return app


def register_error_handlers(app):
    """Render every failure in the {'success': False, 'error': ...} envelope."""

    @app.errorhandler(QueueError)
    def handle_queue_error(error):
        logger.info("%s %s rejected: %s %s", request.method, request.path, error.code, error.message)
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(OperationalError)
    def handle_database_unavailable(error):
        logger.error(f"Database error: {error}", exc_info=True)
        db.session.rollback()
        return jsonify({
            'success': False,
            'error': 'Database unavailable, please retry',
            'code': 'DATABASE_UNAVAILABLE',
            'retryable': True
        }), 503

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'success': False,
            'error': 'Endpoint not found'
        }), 404

    @app.errorhandler(Exception)
    def handle_exception(e):
        if isinstance(e, HTTPException):
            return jsonify({
                'success': False,
                'error': e.description
            }), e.code
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        db.session.rollback()
        return jsonify({
            'success': False,
            'error': 'Internal server error. Check server logs for details.'
        }), 500


def register_jwt_handlers():
    """Return JSON instead of the default JWT error bodies."""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({
            'success': False,
            'error': 'Authentication required'
        }), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({
            'success': False,
            'error': f'Invalid token: {reason}'
        }), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({
            'success': False,
            'error': 'Token has expired'
        }), 401


def register_cli(app):
    """
    Adds small helper CLI commands:
    - flask create-db: create tables using the configured database
    - flask drop-db: drop all tables (use with caution)
    - flask seed-directory: demo doctors, clinics and consulting hours
    - flask create-staff: add a clinic_staff account
    """

    @app.cli.command("create-db")
    def create_db_command():
        """Create database tables if they do not exist."""
        db.create_all()
        click.echo("Database tables created.")

    @app.cli.command("drop-db")
    def drop_db_command():
        """Drop all database tables. This is destructive."""
        db.drop_all()
        click.echo("Database tables dropped.")

    @app.cli.command("seed-directory")
    def seed_directory_command():
        """Seed demo directory rows if the database is empty."""
        from clinic_queue.seeds import seed_directory
        if seed_directory():
            click.echo("Directory seeded.")
        else:
            click.echo("Directory already has doctors (skipping).")

    @app.cli.command("create-staff")
    @click.option("--mobile-number", required=True)
    @click.option("--full-name", required=True)
    @click.password_option()
    def create_staff_command(mobile_number, full_name, password):
        """Create a clinic_staff user."""
        from clinic_queue.seeds import create_staff_user
        user, created = create_staff_user(mobile_number, full_name, password)
        if created:
            click.echo(f"Created clinic staff user {user.id} ({mobile_number}).")
        else:
            click.echo(f"User {mobile_number} already exists (skipping).")
