"""
Visit API Routes
Records follow-up encounters (vitals and labs) for patients
"""
from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from ncd_clinic.exceptions import ClinicError
from ncd_clinic.services import visit_service
from ncd_clinic.services.report_service import parse_window
from ncd_clinic.utils import error_response, server_error, parse_id

visit_bp = Blueprint('visit', __name__, url_prefix='/api/visits')


@visit_bp.route('', methods=['GET'])
@jwt_required()
def list_visits():
    """
    List visits, newest visit date first

    Query params:
        patient_id: Filter by patient ID
        month, year: Filter by visit date (both required to filter)
    """
    try:
        patient_id = request.args.get('patient_id')
        if patient_id:
            patient_id = parse_id(patient_id, 'patient')
        window = parse_window(request.args.get('month'), request.args.get('year'))

        visits = visit_service.list_visits(patient_id=patient_id or None, window=window)
        return jsonify({
            'success': True,
            'data': [visit.to_dict(patient_name=visit.patient.name) for visit in visits],
            'count': len(visits)
        }), 200
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to list visits', e)


@visit_bp.route('', methods=['POST'])
@jwt_required()
def create_visit():
    """
    Record a visit for a patient
    The patient becomes a Repeat patient
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    try:
        visit = visit_service.create_visit(data)
        return jsonify({
            'success': True,
            'data': visit.to_dict(),
            'message': 'Visit recorded successfully'
        }), 201
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to create visit', e)


@visit_bp.route('/<visit_id>', methods=['GET'])
@jwt_required()
def get_visit(visit_id):
    """Get visit details by ID"""
    try:
        visit = visit_service.get_visit(parse_id(visit_id, 'visit'))
        return jsonify({
            'success': True,
            'data': visit.to_dict(patient_name=visit.patient.name)
        }), 200
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to get visit', e)


@visit_bp.route('/<visit_id>', methods=['PUT'])
@jwt_required()
def update_visit(visit_id):
    """Replace the clinical fields of a visit"""
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    try:
        visit = visit_service.update_visit(parse_id(visit_id, 'visit'), data)
        return jsonify({
            'success': True,
            'data': visit.to_dict(),
            'message': 'Visit updated successfully'
        }), 200
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to update visit', e)


@visit_bp.route('/<visit_id>', methods=['DELETE'])
@jwt_required()
def delete_visit(visit_id):
    """Delete a visit; the patient stays a Repeat patient"""
    try:
        visit_id = parse_id(visit_id, 'visit')
        visit_service.delete_visit(visit_id)
        return jsonify({
            'success': True,
            'message': 'Visit deleted successfully'
        }), 200
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to delete visit', e)
