"""
Gestational age preview endpoints (nothing is stored)
"""
from datetime import date

from flask import Blueprint, request, jsonify, current_app

from pregnancy_tracker.utils.i18n import describe_gestational_age, normalize_language
from pregnancy_tracker.utils.ob_calculators import compute, parse_lmp

calculator_bp = Blueprint('calculator', __name__, url_prefix='/api/gestational-age')


def resolve_reference_date(value):
    """Reference date for a request: as_of if given, otherwise today. Raises ValueError."""
    if not value:
        return date.today()
    return parse_lmp(value)


def resolve_language(value):
    return normalize_language(value or current_app.config.get('DEFAULT_LANGUAGE'))


def gestational_age_payload(lmp, as_of, language='en'):
    """Computed gestational age block with display labels, as returned by the API."""
    result = compute(lmp, as_of)
    data = result.to_dict()
    data['last_menstrual_period'] = parse_lmp(lmp).isoformat()
    data['as_of'] = as_of.isoformat()
    data['display'] = describe_gestational_age(result, language)
    return data


def _preview(lmp_value, as_of_value, lang_value):
    if not lmp_value:
        return jsonify({
            'success': False,
            'error': 'Field "last_menstrual_period" is required'
        }), 400

    try:
        lmp = parse_lmp(lmp_value)
        as_of = resolve_reference_date(as_of_value)
    except ValueError as e:
        return jsonify({
            'success': False,
            'error': str(e)
        }), 400

    try:
        data = gestational_age_payload(lmp, as_of, resolve_language(lang_value))
    except OverflowError:
        return jsonify({
            'success': False,
            'error': 'Due date for this LMP is beyond the supported calendar range'
        }), 400

    return jsonify({
        'success': True,
        'data': data
    }), 200


@calculator_bp.route('', methods=['GET'])
def preview_gestational_age():
    """
    Preview gestational age for an LMP date
    Query params: lmp (YYYY-MM-DD), as_of (optional), lang (optional)
    """
    return _preview(
        request.args.get('lmp', '', type=str).strip(),
        request.args.get('as_of', '', type=str).strip(),
        request.args.get('lang'),
    )


@calculator_bp.route('', methods=['POST'])
def preview_gestational_age_json():
    """
    Preview gestational age from a JSON body
    Body: { "last_menstrual_period": "YYYY-MM-DD", "as_of": "YYYY-MM-DD", "lang": "en" }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return jsonify({
            'success': False,
            'error': 'Request body must be JSON'
        }), 400

    return _preview(data.get('last_menstrual_period'), data.get('as_of'), data.get('lang'))
