"""
Reporting API Routes
Dashboard summary: patient counts, condition and gender breakdowns, recent visits
"""
from flask import Blueprint, request, jsonify, current_app
from flask_jwt_extended import jwt_required
from ncd_clinic.exceptions import ClinicError, ValidationError
from ncd_clinic.services.report_service import get_summary, parse_window
from ncd_clinic.utils import error_response, parse_int, server_error

reporting_bp = Blueprint('reporting', __name__, url_prefix='/api/reports')

MAX_RECENT_VISITS = 100


@reporting_bp.route('/summary', methods=['GET'])
@jwt_required()
def summary():
    """
    Aggregate summary for a month, or all time

    Query params:
        month: 1-12
        year: e.g. 2025 (month and year are both needed to filter)
        limit: number of recent visits (default: RECENT_VISITS_LIMIT, max: 100)
    """
    try:
        window = parse_window(request.args.get('month'), request.args.get('year'))

        limit = parse_int('limit', request.args.get('limit'))
        if limit is None:
            limit = current_app.config['RECENT_VISITS_LIMIT']
        if limit < 1:
            raise ValidationError('limit must be a positive number')
        limit = min(limit, MAX_RECENT_VISITS)

        return jsonify({
            'success': True,
            'data': get_summary(window=window, limit=limit)
        }), 200
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to build report summary', e)
