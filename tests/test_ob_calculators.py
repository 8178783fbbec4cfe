from datetime import date, datetime, timedelta

import pytest

from pregnancy_tracker.utils.ob_calculators import (
    FULL_TERM_DAYS,
    GestationalAgeResult,
    calculate_edd_from_lmp,
    compute,
    compute_today,
    parse_lmp,
    trimester_for_weeks,
)

LMP = date(2024, 1, 1)


def test_same_day_is_zero_weeks_first_trimester():
    result = compute(LMP, date(2024, 1, 1))

    assert result == GestationalAgeResult(
        weeks=0,
        days=0,
        total_days=0,
        trimester=1,
        due_date=date(2024, 10, 7),
        is_overdue=False,
    )


def test_fourteen_weeks_is_second_trimester():
    result = compute(LMP, date(2024, 4, 8))

    assert result.total_days == 98
    assert (result.weeks, result.days) == (14, 0)
    assert result.trimester == 2
    assert result.formatted == "14+0 weeks"


def test_one_year_after_lmp_is_overdue():
    # 2023 is not a leap year: 365 calendar days
    result = compute(date(2023, 1, 1), date(2024, 1, 1))

    assert result.total_days == 365
    assert result.weeks == 52
    assert result.days == 1
    assert result.trimester == 3
    assert result.is_overdue is True


@pytest.mark.parametrize("weeks, trimester", [
    (0, 1), (12, 1), (13, 2), (26, 2), (27, 3), (40, 3), (-1, 1),
])
def test_trimester_boundaries(weeks, trimester):
    assert trimester_for_weeks(weeks) == trimester
    assert compute(LMP, LMP + timedelta(weeks=weeks)).trimester == trimester


def test_last_day_of_week_twelve_stays_first_trimester():
    result = compute(LMP, LMP + timedelta(days=12 * 7 + 6))
    assert (result.weeks, result.days, result.trimester) == (12, 6, 1)


def test_overdue_only_after_full_term():
    at_term = compute(LMP, LMP + timedelta(days=FULL_TERM_DAYS))
    past_term = compute(LMP, LMP + timedelta(days=FULL_TERM_DAYS + 1))

    assert at_term.is_overdue is False
    assert at_term.weeks == 40
    assert at_term.weeks_remaining == 0
    assert past_term.is_overdue is True


def test_weeks_days_and_due_date_hold_over_a_range():
    for offset in range(0, 400):
        now = LMP + timedelta(days=offset)
        result = compute(LMP, now)

        assert result.total_days == offset
        assert result.weeks == offset // 7
        assert 0 <= result.days <= 6
        assert result.weeks * 7 + result.days == offset
        assert result.due_date - LMP == timedelta(days=280)


def test_future_lmp_uses_floor_division():
    result = compute(date(2024, 1, 4), date(2024, 1, 1))

    assert result.total_days == -3
    assert result.weeks == -1
    assert result.days == 4
    assert result.trimester == 1
    assert result.is_overdue is False
    assert result.is_future is True
    assert result.due_date == date(2024, 10, 10)


def test_progress_percent_is_capped_but_not_clamped_below_zero():
    assert compute(LMP, LMP + timedelta(days=140)).progress_percent == 50
    assert compute(LMP, LMP + timedelta(days=400)).progress_percent == 100
    assert compute(LMP, LMP - timedelta(days=28)).progress_percent == pytest.approx(-10)


def test_time_of_day_is_ignored():
    late_lmp = datetime(2024, 1, 1, 23, 59)
    early_now = datetime(2024, 4, 8, 0, 1)

    assert compute(late_lmp, early_now) == compute(LMP, date(2024, 4, 8))


def test_accepts_iso_strings():
    assert compute("2024-01-01", "2024-04-08") == compute(LMP, date(2024, 4, 8))


def test_compute_is_idempotent():
    assert compute(LMP, date(2024, 6, 1)) == compute(LMP, date(2024, 6, 1))


def test_compute_today_uses_system_date():
    lmp = date(2024, 1, 1)
    before = date.today()
    result = compute_today(lmp)
    after = date.today()

    assert result.total_days in {(before - lmp).days, (after - lmp).days}


def test_edd_crosses_year_boundary():
    assert calculate_edd_from_lmp(date(2024, 6, 1)) == date(2025, 3, 8)


def test_to_dict_serializes_dates():
    data = compute(LMP, date(2024, 4, 8)).to_dict()

    assert data["due_date"] == "2024-10-07"
    assert data["weeks"] == 14
    assert data["progress_percent"] == 35.0
    assert data["weeks_remaining"] == 26


@pytest.mark.parametrize("value", ["", "   ", None, "2024-13-01", "not a date", 20240101])
def test_parse_lmp_rejects_invalid_values(value):
    with pytest.raises(ValueError):
        parse_lmp(value)


def test_parse_lmp_accepts_datetime_string():
    assert parse_lmp("2024-01-01T10:30:00") == LMP
