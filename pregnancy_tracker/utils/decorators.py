from functools import wraps
from flask import jsonify, g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from pregnancy_tracker.extensions import db
from pregnancy_tracker.models import Clinician


def get_current_clinician_id():
    """Returns the clinician id from the JWT identity."""
    return int(get_jwt_identity())


def clinician_required(f):
    """
    Require a valid access token for an existing, active clinician.
    The clinician is available as g.clinician inside the view.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        verify_jwt_in_request()
        try:
            clinician = db.session.get(Clinician, get_current_clinician_id())
        except (TypeError, ValueError):
            clinician = None

        if not clinician or not clinician.is_active:
            return jsonify({
                'success': False,
                'error': 'Authentication required'
            }), 401

        g.clinician = clinician
        return f(*args, **kwargs)
    return decorated_function
