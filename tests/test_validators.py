from datetime import date

import pytest

from pregnancy_tracker.utils.validators import ValidationError, validate_patient_payload

TODAY = date(2024, 6, 1)


def _errors(data, **kwargs):
    with pytest.raises(ValidationError) as exc:
        validate_patient_payload(data, today=TODAY, **kwargs)
    return exc.value.errors


def test_valid_payload_is_cleaned():
    cleaned = validate_patient_payload(
        {"name": "  Jane Doe ", "last_menstrual_period": "2024-01-01", "notes": "  first pregnancy "},
        today=TODAY,
    )

    assert cleaned == {
        "name": "Jane Doe",
        "last_menstrual_period": date(2024, 1, 1),
        "notes": "first pregnancy",
    }


def test_blank_notes_become_none():
    cleaned = validate_patient_payload(
        {"name": "Jane", "last_menstrual_period": "2024-01-01", "notes": "   "},
        today=TODAY,
    )
    assert cleaned["notes"] is None


def test_missing_fields_are_reported_together():
    errors = _errors({})
    assert set(errors) == {"name", "last_menstrual_period"}


def test_name_length_limits():
    ok = validate_patient_payload({"name": "x" * 200, "last_menstrual_period": "2024-01-01"}, today=TODAY)
    assert len(ok["name"]) == 200

    assert "name" in _errors({"name": "x" * 201, "last_menstrual_period": "2024-01-01"})


def test_lmp_may_be_today_but_not_tomorrow():
    assert validate_patient_payload(
        {"name": "Jane", "last_menstrual_period": "2024-06-01"}, today=TODAY
    )["last_menstrual_period"] == TODAY

    errors = _errors({"name": "Jane", "last_menstrual_period": "2024-06-02"})
    assert "future" in errors["last_menstrual_period"]


def test_lmp_lower_bound_is_1900():
    assert validate_patient_payload(
        {"name": "Jane", "last_menstrual_period": "1900-01-01"}, today=TODAY
    )["last_menstrual_period"] == date(1900, 1, 1)

    assert "1900-01-01" in _errors({"name": "Jane", "last_menstrual_period": "1899-12-31"})["last_menstrual_period"]


def test_malformed_lmp():
    errors = _errors({"name": "Jane", "last_menstrual_period": "01/02/2024"})
    assert "YYYY-MM-DD" in errors["last_menstrual_period"]


def test_notes_length_limit():
    assert "notes" in _errors({"name": "Jane", "last_menstrual_period": "2024-01-01", "notes": "n" * 1001})


def test_partial_only_checks_given_fields():
    assert validate_patient_payload({"notes": "follow-up"}, partial=True, today=TODAY) == {"notes": "follow-up"}
    assert "name" in _errors({"name": ""}, partial=True)
