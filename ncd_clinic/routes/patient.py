from flask import Blueprint, request, jsonify
from flask_jwt_extended import jwt_required
from ncd_clinic.exceptions import ClinicError
from ncd_clinic.services import patient_service
from ncd_clinic.utils import error_response, server_error, parse_id

patient_bp = Blueprint('patient', __name__, url_prefix='/api/patients')


def _patients_response(rows):
    return jsonify({
        'success': True,
        'data': [patient.to_dict(last_visit=last_visit) for patient, last_visit in rows],
        'count': len(rows)
    }), 200


@patient_bp.route('', methods=['GET'])
@jwt_required()
def list_patients():
    """
    List all patients ordered by name, each with its last visit date
    """
    try:
        return _patients_response(patient_service.list_patients())
    except Exception as e:
        return server_error('Failed to list patients', e)


@patient_bp.route('/search', methods=['GET'])
@jwt_required()
def search_patients():
    """
    Search patients by name, contact, condition or MRN
    Query param: q (search query, empty lists everyone)
    """
    query = request.args.get('q', '', type=str).strip()
    try:
        return _patients_response(patient_service.list_patients(search=query))
    except Exception as e:
        return server_error('Failed to search patients', e)


@patient_bp.route('', methods=['POST'])
@jwt_required()
def create_patient():
    """
    Register a new patient
    Returns the generated id and MRN along with the patient
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    try:
        patient = patient_service.create_patient(data)
        return jsonify({
            'success': True,
            'data': patient.to_dict(),
            'message': 'Patient registered successfully'
        }), 201
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to create patient', e)


@patient_bp.route('/<patient_id>', methods=['GET'])
@jwt_required()
def get_patient(patient_id):
    """Get single patient by ID"""
    try:
        patient_id = parse_id(patient_id, 'patient')
        patient = patient_service.get_patient(patient_id)
        last_visit = patient_service.get_last_visit(patient_id)
        return jsonify({
            'success': True,
            'data': patient.to_dict(last_visit=last_visit)
        }), 200
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to get patient', e)


@patient_bp.route('/<patient_id>/visits', methods=['GET'])
@jwt_required()
def get_patient_visits(patient_id):
    """Visit history for a patient, newest first"""
    try:
        patient_id = parse_id(patient_id, 'patient')
        visits = patient_service.list_patient_visits(patient_id)
        return jsonify({
            'success': True,
            'data': [visit.to_dict() for visit in visits],
            'count': len(visits)
        }), 200
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to get patient visits', e)


@patient_bp.route('/<patient_id>', methods=['PUT'])
@jwt_required()
def update_patient(patient_id):
    """
    Update patient information
    All mutable fields are replaced; the id cannot change
    """
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    try:
        patient_id = parse_id(patient_id, 'patient')
        patient = patient_service.update_patient(patient_id, data)
        last_visit = patient_service.get_last_visit(patient_id)
        return jsonify({
            'success': True,
            'data': patient.to_dict(last_visit=last_visit),
            'message': 'Patient updated successfully'
        }), 200
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to update patient', e)


@patient_bp.route('/<patient_id>', methods=['DELETE'])
@jwt_required()
def delete_patient(patient_id):
    """
    Delete a patient together with all of their visits
    """
    try:
        patient_id = parse_id(patient_id, 'patient')
        removed = patient_service.delete_patient(patient_id)
        return jsonify({
            'success': True,
            'message': 'Patient and records deleted successfully',
            'data': {'id': patient_id, 'visits_deleted': removed}
        }), 200
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to delete patient', e)
