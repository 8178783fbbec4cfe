from .clinician import Clinician
from .patient import Patient
from .audit_log import AuditLog

__all__ = ["Clinician", "Patient", "AuditLog"]
