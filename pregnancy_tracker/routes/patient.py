from flask import Blueprint, request, jsonify, g

from pregnancy_tracker.routes.calculator import (
    gestational_age_payload,
    resolve_language,
    resolve_reference_date,
)
from pregnancy_tracker.services.patient_service import (
    PatientNotFoundError,
    PatientOperationError,
    create_patient as store_create_patient,
    delete_patient as store_delete_patient,
    get_patient as store_get_patient,
    list_patients as store_list_patients,
    update_patient as store_update_patient,
)
from pregnancy_tracker.utils.audit import log_patient_audit
from pregnancy_tracker.utils.decorators import clinician_required
from pregnancy_tracker.utils.validators import ValidationError, validate_patient_payload

patient_bp = Blueprint('patient', __name__, url_prefix='/api/patients')


def _patient_to_dict(patient, as_of, language):
    """Patient fields plus the gestational age computed for as_of."""
    data = patient.to_dict()
    data['gestational_age'] = gestational_age_payload(patient.last_menstrual_period, as_of, language)
    return data


def _display_context():
    """(as_of, language) from query params, or an error response."""
    try:
        as_of = resolve_reference_date(request.args.get('as_of', '', type=str).strip())
    except ValueError as e:
        return None, (jsonify({'success': False, 'error': str(e)}), 400)
    return (as_of, resolve_language(request.args.get('lang'))), None


def _not_found():
    return jsonify({
        'success': False,
        'error': 'Patient not found'
    }), 404


def _validation_failed(e):
    return jsonify({
        'success': False,
        'error': 'Validation failed',
        'errors': e.errors
    }), 400


@patient_bp.route('', methods=['GET'])
@clinician_required
def list_patients():
    """
    List the signed-in clinician's patients with pagination and search
    Query params: page, limit, search, as_of, lang
    """
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', 20, type=int)
    search = request.args.get('search', '', type=str).strip()

    if page < 1:
        page = 1
    if limit < 1 or limit > 100:
        limit = 20

    context, error = _display_context()
    if error:
        return error
    as_of, language = context

    patients = store_list_patients(g.clinician.id, search=search or None).paginate(
        page=page,
        per_page=limit,
        error_out=False
    )

    return jsonify({
        'success': True,
        'data': [_patient_to_dict(p, as_of, language) for p in patients.items],
        'pagination': {
            'page': page,
            'limit': limit,
            'total': patients.total,
            'pages': patients.pages,
            'has_next': patients.has_next,
            'has_prev': patients.has_prev
        }
    }), 200


@patient_bp.route('/<patient_id>', methods=['GET'])
@clinician_required
def get_patient(patient_id):
    """Get single patient by ID"""
    context, error = _display_context()
    if error:
        return error

    try:
        patient = store_get_patient(g.clinician.id, patient_id)
    except PatientNotFoundError:
        return _not_found()

    return jsonify({
        'success': True,
        'data': _patient_to_dict(patient, *context)
    }), 200


@patient_bp.route('/<patient_id>/gestational-age', methods=['GET'])
@clinician_required
def get_patient_gestational_age(patient_id):
    """Gestational age block only, recomputed for as_of (default today)"""
    context, error = _display_context()
    if error:
        return error

    try:
        patient = store_get_patient(g.clinician.id, patient_id)
    except PatientNotFoundError:
        return _not_found()

    return jsonify({
        'success': True,
        'data': gestational_age_payload(patient.last_menstrual_period, *context)
    }), 200


@patient_bp.route('', methods=['POST'])
@clinician_required
def create_patient():
    """
    Add a new patient
    Body: { "name": str, "last_menstrual_period": "YYYY-MM-DD", "notes": str|null }
    """
    context, error = _display_context()
    if error:
        return error

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    try:
        cleaned = validate_patient_payload(data)
    except ValidationError as e:
        return _validation_failed(e)

    try:
        patient = store_create_patient(g.clinician.id, **cleaned)
    except PatientOperationError:
        return jsonify({
            'success': False,
            'error': 'Failed to add patient. Please try again.'
        }), 500

    log_patient_audit('create', patient, user_id=g.clinician.id)

    return jsonify({
        'success': True,
        'data': _patient_to_dict(patient, *context),
        'message': 'Patient added successfully!'
    }), 201


@patient_bp.route('/<patient_id>', methods=['PUT'])
@clinician_required
def update_patient(patient_id):
    """
    Update patient name, LMP and/or notes (only provided fields)
    """
    context, error = _display_context()
    if error:
        return error

    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    try:
        cleaned = validate_patient_payload(data, partial=True)
    except ValidationError as e:
        return _validation_failed(e)

    if not cleaned:
        return jsonify({
            'success': False,
            'error': 'No updatable fields provided (name, last_menstrual_period, notes)'
        }), 400

    try:
        patient = store_update_patient(g.clinician.id, patient_id, **cleaned)
    except PatientNotFoundError:
        return _not_found()
    except PatientOperationError:
        return jsonify({
            'success': False,
            'error': 'Failed to update patient. Please try again.'
        }), 500

    log_patient_audit('edit', patient, user_id=g.clinician.id, changes=cleaned)

    return jsonify({
        'success': True,
        'data': _patient_to_dict(patient, *context),
        'message': 'Patient updated successfully!'
    }), 200


@patient_bp.route('/<patient_id>', methods=['DELETE'])
@clinician_required
def delete_patient(patient_id):
    """Soft-delete patient (no hard deletion of medical data)"""
    try:
        patient = store_delete_patient(g.clinician.id, patient_id)
    except PatientNotFoundError:
        return _not_found()
    except PatientOperationError:
        return jsonify({
            'success': False,
            'error': 'Failed to remove patient. Please try again.'
        }), 500

    log_patient_audit('delete', patient, user_id=g.clinician.id)

    return jsonify({
        'success': True,
        'message': 'Patient removed successfully.'
    }), 200
