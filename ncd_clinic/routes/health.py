"""
Health check endpoints for monitoring and load balancers
"""
import logging
from datetime import datetime

from alembic.migration import MigrationContext
from flask import Blueprint, jsonify

from ncd_clinic.extensions import db

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__, url_prefix='/health')

SERVICE_NAME = 'ncd-clinic'


def _now():
    return datetime.utcnow().isoformat()


def _schema_version():
    """Alembic revision the database is at, None when never migrated"""
    return MigrationContext.configure(db.session.connection()).get_current_revision()


@health_bp.route('', methods=['GET'])
@health_bp.route('/ping', methods=['GET'])
def health_check():
    """Process is up; does not touch the database"""
    return jsonify({'status': 'healthy', 'service': SERVICE_NAME, 'timestamp': _now()}), 200


@health_bp.route('/ready', methods=['GET'])
def readiness_check():
    """Database reachable and schema migrated"""
    try:
        db.session.execute(db.text('SELECT 1'))
        schema_version = _schema_version()
    except Exception as e:
        db.session.rollback()
        logger.warning(f"Readiness check failed: {e}")
        return jsonify({
            'status': 'not_ready',
            'database': f'error: {e}',
            'timestamp': _now(),
        }), 503

    return jsonify({
        'status': 'ready',
        'database': 'connected',
        'schema_version': schema_version,
        'timestamp': _now(),
    }), 200


@health_bp.route('/live', methods=['GET'])
def liveness_check():
    return jsonify({'status': 'alive', 'timestamp': _now()}), 200
