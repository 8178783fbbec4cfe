"""
Audit logging: patient create, edit, delete.
"""
import json
import logging
from typing import Optional

from pregnancy_tracker.extensions import db
from pregnancy_tracker.models import AuditLog

logger = logging.getLogger(__name__)

PATIENT_ACTIONS = ('create', 'edit', 'delete')


def log_audit(
    entity_type: str,
    action: str,
    user_id: Optional[int] = None,
    entity_id: Optional[str] = None,
    details: Optional[dict] = None,
) -> None:
    """Append an audit log entry. Failures are logged, never raised."""
    try:
        entry = AuditLog(
            entity_type=entity_type,
            entity_id=str(entity_id) if entity_id is not None else None,
            action=action,
            user_id=user_id,
            details=json.dumps(details, default=str) if details else None,
        )
        db.session.add(entry)
        db.session.commit()
        logger.info("Audit: %s %s %s by user %s", action, entity_type, entity_id, user_id)
    except Exception as e:
        logger.warning("Audit log failed: %s", e)
        db.session.rollback()


def log_patient_audit(action: str, patient, user_id: int, changes: Optional[dict] = None) -> None:
    """Audit entry for a patient mutation, recording the name and changed fields."""
    if action not in PATIENT_ACTIONS:
        raise ValueError(f"Unknown patient audit action: {action}")
    details = {'name': patient.name}
    if changes:
        details['changes'] = sorted(changes)
    log_audit('patient', action, user_id=user_id, entity_id=patient.id, details=details)
