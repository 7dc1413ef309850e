from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException
from .extensions import db, migrate, bcrypt, jwt
from .migrations import MIGRATIONS_DIR
import logging
import os

# Setup basic logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s %(levelname)s: %(message)s'
)
logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Create Flask application factory"""
    app = Flask(__name__)

    # Load configuration
    if config_name:
        from ncd_clinic.config import config
        app.config.from_object(config.get(config_name, config['default']))
    else:
        from ncd_clinic.config import get_config
        app.config.from_object(get_config())

    # Ensure production mode if FLASK_ENV is production
    if os.getenv('FLASK_ENV') == 'production' and not app.config.get('TESTING'):
        app.config['DEBUG'] = False

    # Initialize extensions first (before error handlers)
    db.init_app(app)
    migrate.init_app(app, db, directory=MIGRATIONS_DIR, render_as_batch=True)
    bcrypt.init_app(app)
    jwt.init_app(app)
    register_jwt_handlers()

    # Initialize CORS
    from ncd_clinic.utils.cors import init_cors
    init_cors(app)

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'success': False,
            'error': 'Endpoint not found'
        }), 404

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        return jsonify({
            'success': False,
            'error': e.description
        }), e.code

    @app.errorhandler(Exception)
    def handle_exception(e):
        logger.error(f"Unhandled exception: {e}", exc_info=True)
        db.session.rollback()
        return jsonify({
            'success': False,
            'error': 'Internal server error. Check server logs for details.'
        }), 500

    # Setup logging
    if not app.debug and not app.testing:
        from logging.handlers import RotatingFileHandler

        log_file = app.config['LOG_FILE']
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)

        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=10240000,
            backupCount=10
        )
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(app.config['LOG_LEVEL'])
        app.logger.addHandler(file_handler)
        app.logger.setLevel(app.config['LOG_LEVEL'])
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

    from .cli import register_cli
    register_cli(app)

    with app.app_context():
        # Import models to register them with SQLAlchemy
        from .models import Patient, Visit, User  # noqa: F401

        # Register blueprints
        from .routes import auth_bp, patient_bp, visit_bp, reporting_bp, health_bp
        app.register_blueprint(health_bp)  # Register health check first
        app.register_blueprint(auth_bp)
        app.register_blueprint(patient_bp)
        app.register_blueprint(visit_bp)
        app.register_blueprint(reporting_bp)

        init_database()

    return app


def init_database():
    """
    Create missing tables, then run pending Alembic revisions.

    Returns:
        str: the revision the database is at afterwards
    """
    from alembic.migration import MigrationContext
    from flask_migrate import upgrade

    db.create_all()
    upgrade()
    with db.engine.connect() as conn:
        revision = MigrationContext.configure(conn).get_current_revision()
    logger.info(f"Database schema at revision {revision}")
    return revision


def register_jwt_handlers():
    """Return JWT failures in the same JSON shape as every other error"""

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
