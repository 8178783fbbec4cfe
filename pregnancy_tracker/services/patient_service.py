"""
Patient Service
Persistence for pregnant patients: create, list, update, delete
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from pregnancy_tracker.extensions import db
from pregnancy_tracker.models import Patient

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('name', 'last_menstrual_period', 'notes')


class PatientServiceError(Exception):
    """Base error for patient persistence."""


class PatientNotFoundError(PatientServiceError):
    """Patient does not exist, was deleted, or belongs to another clinician."""


class PatientOperationError(PatientServiceError):
    """The storage operation failed; the caller may retry."""


def _active_patients(clinician_id: int):
    return Patient.query.filter(
        Patient.clinician_id == clinician_id,
        Patient.deleted_at.is_(None),
    )


def _escape_like(value: str) -> str:
    return value.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')


def _commit(action: str):
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Failed to %s patient: %s", action, e, exc_info=True)
        raise PatientOperationError(f"Failed to {action} patient") from e


def create_patient(clinician_id: int, name: str, last_menstrual_period, notes: Optional[str] = None) -> Patient:
    """
    Create a new patient record

    Args:
        clinician_id: Owner clinician ID
        name: Patient name (validated)
        last_menstrual_period: LMP date (validated)
        notes: Optional notes

    Returns:
        Patient: Created patient
    """
    patient = Patient(
        clinician_id=clinician_id,
        name=name,
        last_menstrual_period=last_menstrual_period,
        notes=notes,
    )
    db.session.add(patient)
    _commit('create')
    logger.info("Patient %s created by clinician %s", patient.id, clinician_id)
    return patient


def list_patients(clinician_id: int, search: Optional[str] = None):
    """Query of the clinician's patients, newest first, optionally filtered by name or notes."""
    query = _active_patients(clinician_id)
    if search:
        pattern = f'%{_escape_like(search)}%'
        query = query.filter(or_(
            Patient.name.ilike(pattern, escape='\\'),
            Patient.notes.ilike(pattern, escape='\\'),
        ))
    return query.order_by(Patient.created_at.desc())


def get_patient(clinician_id: int, patient_id: str) -> Patient:
    patient = _active_patients(clinician_id).filter(Patient.id == patient_id).first()
    if not patient:
        raise PatientNotFoundError(patient_id)
    return patient


def update_patient(clinician_id: int, patient_id: str, **fields) -> Patient:
    """
    Update a patient's name, LMP and/or notes (only the given fields)

    Raises:
        PatientNotFoundError: unknown, deleted or foreign patient
        PatientOperationError: storage failure
    """
    patient = get_patient(clinician_id, patient_id)
    for field, value in fields.items():
        if field not in UPDATABLE_FIELDS:
            raise ValueError(f"Field {field!r} cannot be updated")
        setattr(patient, field, value)
    _commit('update')
    logger.info("Patient %s updated by clinician %s", patient_id, clinician_id)
    return patient


def delete_patient(clinician_id: int, patient_id: str) -> Patient:
    """Soft-delete a patient. Returns the deleted record for auditing."""
    patient = get_patient(clinician_id, patient_id)
    patient.deleted_at = datetime.utcnow()
    _commit('delete')
    logger.info("Patient %s deleted by clinician %s", patient_id, clinician_id)
    return patient
