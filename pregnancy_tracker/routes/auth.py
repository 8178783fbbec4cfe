import logging
from datetime import datetime

from flask import Blueprint, request, jsonify, g
from flask_jwt_extended import (
    create_access_token,
    create_refresh_token,
    jwt_required,
    get_jwt_identity,
)
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from pregnancy_tracker.extensions import db
from pregnancy_tracker.models import Clinician
from pregnancy_tracker.utils.decorators import clinician_required

logger = logging.getLogger(__name__)

auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')

MIN_PASSWORD_LENGTH = 8


def _token_response(clinician, status=200):
    # Identity must be a string for the JWT "sub" claim
    identity = str(clinician.id)
    additional_claims = {"username": clinician.username}

    access_token = create_access_token(
        identity=identity,
        additional_claims=additional_claims,
        fresh=True,
    )
    refresh_token = create_refresh_token(identity=identity, additional_claims=additional_claims)

    return jsonify({
        'success': True,
        'data': clinician.to_dict(),
        'access_token': access_token,
        'refresh_token': refresh_token,
        'token_type': 'bearer',
    }), status


@auth_bp.route('/register', methods=['POST'])
def register():
    """Sign up a new clinician and sign them in"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    required_fields = ['username', 'email', 'password', 'first_name', 'last_name']
    for field in required_fields:
        if not data.get(field):
            return jsonify({
                'success': False,
                'error': f'Field "{field}" is required'
            }), 400

    if len(data['password']) < MIN_PASSWORD_LENGTH:
        return jsonify({
            'success': False,
            'error': f'Password must be at least {MIN_PASSWORD_LENGTH} characters'
        }), 400

    existing = Clinician.query.filter(or_(
        Clinician.username == data['username'],
        Clinician.email == data['email'],
    )).first()
    if existing:
        return jsonify({
            'success': False,
            'error': 'Username or email already exists'
        }), 400

    clinician = Clinician(
        username=data['username'],
        email=data['email'],
        first_name=data['first_name'],
        last_name=data['last_name'],
        is_active=True,
        last_login=datetime.utcnow(),
        login_count=1,
    )
    clinician.set_password(data['password'])

    try:
        db.session.add(clinician)
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        return jsonify({
            'success': False,
            'error': 'Username or email already exists'
        }), 400

    logger.info("Clinician %s registered", clinician.username)
    return _token_response(clinician, status=201)


@auth_bp.route('/login', methods=['POST'])
def login():
    """Login endpoint - authenticates clinician and returns JWT tokens"""
    data = request.get_json(silent=True)

    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    username = data.get('username')
    password = data.get('password')

    if not username or not password:
        return jsonify({
            'success': False,
            'error': 'Username and password required'
        }), 400

    clinician = Clinician.query.filter(or_(
        Clinician.username == username,
        Clinician.email == username,
    )).first()

    if not clinician or not clinician.check_password(password):
        logger.warning("Failed login attempt for %s", username)
        return jsonify({
            'success': False,
            'error': 'Invalid username or password'
        }), 401

    if not clinician.is_active:
        return jsonify({
            'success': False,
            'error': 'Account is deactivated'
        }), 403

    # Update login tracking
    clinician.last_login = datetime.utcnow()
    clinician.login_count = (clinician.login_count or 0) + 1
    db.session.commit()

    return _token_response(clinician)


@auth_bp.route('/logout', methods=['POST'])
@jwt_required()
def logout():
    """Stateless JWT: the client deletes its tokens"""
    return jsonify({
        'success': True,
        'message': 'Logged out successfully (delete tokens on client)'
    }), 200


@auth_bp.route('/me', methods=['GET'])
@clinician_required
def get_current_user():
    """Get current signed-in clinician"""
    return jsonify({
        'success': True,
        'data': g.clinician.to_dict()
    }), 200


@auth_bp.route('/refresh', methods=['POST'])
@jwt_required(refresh=True)
def refresh():
    """Refresh access token using refresh token"""
    identity = get_jwt_identity()
    clinician = db.session.get(Clinician, int(identity))
    if not clinician or not clinician.is_active:
        return jsonify({
            'success': False,
            'error': 'Could not refresh token'
        }), 401

    new_access_token = create_access_token(
        identity=identity,
        additional_claims={"username": clinician.username},
        fresh=False  # refreshed tokens are not fresh
    )
    return jsonify({
        'success': True,
        'access_token': new_access_token,
        'token_type': 'bearer',
    }), 200
