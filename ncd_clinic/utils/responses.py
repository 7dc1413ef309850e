import logging

from flask import current_app, jsonify

from ncd_clinic.extensions import db

logger = logging.getLogger(__name__)


def error_response(error):
    """JSON body and status for a ClinicError raised by a service"""
    return jsonify({
        'success': False,
        'error': error.message
    }), error.status_code


def server_error(message, error):
    """Log an unexpected failure, roll back, and answer 500 with a generic message"""
    logger.error(f"{message}: {error}", exc_info=True)
    db.session.rollback()
    error_msg = message if not current_app.debug else str(error)
    return jsonify({
        'success': False,
        'error': error_msg
    }), 500
