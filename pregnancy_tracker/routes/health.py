"""
Health check endpoints for monitoring and load balancers
"""
import logging
from datetime import date, datetime

from flask import Blueprint, jsonify
from sqlalchemy.exc import SQLAlchemyError

from pregnancy_tracker.extensions import db
from pregnancy_tracker.utils.ob_calculators import compute

logger = logging.getLogger(__name__)

health_bp = Blueprint('health', __name__, url_prefix='/health')

SERVICE_NAME = 'pregnancy-tracker'


def _calculator_ok():
    """Known scenario: LMP 2024-01-01 seen on 2024-04-08 is 14+0, second trimester."""
    result = compute(date(2024, 1, 1), date(2024, 4, 8))
    return (result.weeks, result.days, result.trimester) == (14, 0, 2)


@health_bp.route('', methods=['GET'])
@health_bp.route('/ping', methods=['GET'])
def health_check():
    """Basic health check - no database connection"""
    return jsonify({
        'status': 'healthy',
        'timestamp': datetime.utcnow().isoformat(),
        'service': SERVICE_NAME
    }), 200


@health_bp.route('/ready', methods=['GET'])
def readiness_check():
    """Readiness check - database connection and calculator self-test"""
    try:
        db.session.execute(db.text('SELECT 1'))
        db_status = 'connected'
    except SQLAlchemyError as e:
        logger.error("Readiness check: database unavailable: %s", e)
        db_status = f'error: {str(e)}'

    calculator_status = 'ok' if _calculator_ok() else 'failed'
    ready = db_status == 'connected' and calculator_status == 'ok'

    return jsonify({
        'status': 'ready' if ready else 'not_ready',
        'database': db_status,
        'calculator': calculator_status,
        'timestamp': datetime.utcnow().isoformat()
    }), 200 if ready else 503


@health_bp.route('/live', methods=['GET'])
def liveness_check():
    """Liveness check for containers"""
    return jsonify({
        'status': 'alive',
        'timestamp': datetime.utcnow().isoformat()
    }), 200
