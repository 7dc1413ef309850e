from flask import Blueprint, request, jsonify
from flask_jwt_extended import (
    create_access_token,
    jwt_required,
    get_jwt_identity,
)
from ncd_clinic.extensions import db
from ncd_clinic.exceptions import ClinicError
from ncd_clinic.models import User
from ncd_clinic.services.user_service import create_user, authenticate
from ncd_clinic.utils import error_response, server_error

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


def _token_for(user):
    # Identity must be a string for the JWT "sub" claim
    additional_claims = {
        "username": user.username,
        "role": user.role,
    }
    return create_access_token(identity=str(user.id), additional_claims=additional_claims)


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Create a staff account"""
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    try:
        user = create_user(
            data.get('username'),
            data.get('password'),
            full_name=data.get('full_name'),
            role=data.get('role'),
        )
        return jsonify({
            'success': True,
            'data': user.to_dict(),
            'message': 'Account created successfully'
        }), 201
    except ClinicError as e:
        return error_response(e)
    except Exception as e:
        return server_error('Failed to create account', e)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login endpoint - authenticates a user and returns a JWT access token"""
    data = request.get_json(silent=True)
    if not data or not isinstance(data, dict):
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    try:
        user = authenticate(data.get('username'), data.get('password'))
    except ClinicError as e:
        return error_response(e)

    if not user:
        return jsonify({
            'success': False,
            'error': 'Invalid username or password'
        }), 401

    return jsonify({
        'success': True,
        'data': user.to_dict(),
        'access_token': _token_for(user),
        'token_type': 'bearer'
    }), 200


@auth_bp.route('/me', methods=['GET'])
@jwt_required()
def get_current_user():
    """Get current logged-in user information"""
    user = db.session.get(User, int(get_jwt_identity()))
    if not user:
        return jsonify({'success': False, 'error': 'User not found'}), 404

    return jsonify({
        'success': True,
        'data': user.to_dict()
    }), 200
