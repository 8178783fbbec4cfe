from .patient_service import (
    PatientServiceError,
    PatientNotFoundError,
    PatientOperationError,
    create_patient,
    list_patients,
    get_patient,
    update_patient,
    delete_patient,
)

__all__ = [
    # Patient Services
    "PatientServiceError",
    "PatientNotFoundError",
    "PatientOperationError",
    "create_patient",
    "list_patients",
    "get_patient",
    "update_patient",
    "delete_patient",
]
