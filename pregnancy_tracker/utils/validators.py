"""
Patient form validation (add / edit patient)
"""
from datetime import date

from pregnancy_tracker.utils.ob_calculators import MIN_LMP_DATE, parse_lmp

NAME_MAX_LENGTH = 200
NOTES_MAX_LENGTH = 1000


class ValidationError(Exception):
    """Raised with a {field: message} mapping when a payload is invalid."""

    def __init__(self, errors):
        super().__init__("Validation failed")
        self.errors = errors


def parse_date(date_string):
    """Parse date string to date object, None if missing or malformed"""
    if not date_string:
        return None
    try:
        return parse_lmp(date_string)
    except ValueError:
        return None


def _clean_name(value, errors):
    if not isinstance(value, str) or not value.strip():
        errors['name'] = 'Name is required'
        return None
    name = value.strip()
    if len(name) > NAME_MAX_LENGTH:
        errors['name'] = f'Name must be at most {NAME_MAX_LENGTH} characters'
        return None
    return name


def _clean_lmp(value, today, errors):
    if value in (None, ''):
        errors['last_menstrual_period'] = 'Please select the last menstrual period date'
        return None
    lmp = parse_date(value)
    if lmp is None:
        errors['last_menstrual_period'] = 'Invalid date format (expected YYYY-MM-DD)'
        return None
    if lmp > today:
        errors['last_menstrual_period'] = 'Last menstrual period cannot be in the future'
        return None
    if lmp < MIN_LMP_DATE:
        errors['last_menstrual_period'] = f'Last menstrual period cannot be before {MIN_LMP_DATE.isoformat()}'
        return None
    return lmp


def _clean_notes(value, errors):
    if value is None:
        return None
    if not isinstance(value, str):
        errors['notes'] = 'Notes must be text'
        return None
    if len(value) > NOTES_MAX_LENGTH:
        errors['notes'] = f'Notes must be at most {NOTES_MAX_LENGTH} characters'
        return None
    return value.strip() or None


def validate_patient_payload(data, partial=False, today=None):
    """
    Validate add/edit patient form data

    Args:
        data: dict with name, last_menstrual_period, notes
        partial: only validate fields present in data (edit)
        today: date used for the "not in the future" check (default: system date)

    Returns:
        dict: cleaned values for the fields that were validated

    Raises:
        ValidationError: with per-field messages
    """
    if today is None:
        today = date.today()

    errors = {}
    cleaned = {}

    if not partial or 'name' in data:
        cleaned['name'] = _clean_name(data.get('name'), errors)
    if not partial or 'last_menstrual_period' in data:
        cleaned['last_menstrual_period'] = _clean_lmp(data.get('last_menstrual_period'), today, errors)
    if not partial or 'notes' in data:
        cleaned['notes'] = _clean_notes(data.get('notes'), errors)

    if errors:
        raise ValidationError(errors)
    return cleaned
