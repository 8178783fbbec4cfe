from .decorators import clinician_required, get_current_clinician_id

from .audit import log_audit, log_patient_audit

from .ob_calculators import (
    GestationalAgeResult,
    compute,
    compute_today,
    parse_lmp,
    trimester_for_weeks,
)

from .validators import ValidationError, validate_patient_payload

__all__ = [
    # Decorators
    "clinician_required",
    "get_current_clinician_id",
    # Audit
    "log_audit",
    "log_patient_audit",
    # OB calculators
    "GestationalAgeResult",
    "compute",
    "compute_today",
    "parse_lmp",
    "trimester_for_weeks",
    # Validation
    "ValidationError",
    "validate_patient_payload",
]
