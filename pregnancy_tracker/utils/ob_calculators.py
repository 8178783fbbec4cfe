"""
OB Calculation Utilities
GA (Gestational Age), EDD (Estimated Due Date), trimester and overdue status from LMP
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
import logging

logger = logging.getLogger(__name__)

# Naegele's rule: 40 weeks full term
FULL_TERM_DAYS = 280
FULL_TERM_WEEKS = 40

SECOND_TRIMESTER_WEEK = 13
THIRD_TRIMESTER_WEEK = 27

MIN_LMP_DATE = date(1900, 1, 1)


@dataclass(frozen=True)
class GestationalAgeResult:
    """Gestational age derived from an LMP date relative to a reference date."""
    weeks: int
    days: int
    total_days: int
    trimester: int
    due_date: date
    is_overdue: bool

    @property
    def formatted(self):
        return f"{self.weeks}+{self.days} weeks"

    @property
    def progress_percent(self):
        """Progress towards full term, capped at 100. Negative totals are not clamped."""
        return min(self.total_days / FULL_TERM_DAYS * 100, 100)

    @property
    def weeks_remaining(self):
        return FULL_TERM_WEEKS - self.weeks

    @property
    def is_future(self):
        return self.total_days < 0

    def to_dict(self):
        return {
            'weeks': self.weeks,
            'days': self.days,
            'total_days': self.total_days,
            'trimester': self.trimester,
            'due_date': self.due_date.isoformat(),
            'is_overdue': self.is_overdue,
            'formatted': self.formatted,
            'progress_percent': round(self.progress_percent, 1),
            'weeks_remaining': self.weeks_remaining,
        }


def _as_date(value):
    """Normalize a date, datetime or ISO string to a calendar date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_lmp(value)


def parse_lmp(value):
    """
    Parse an LMP value given as ISO-8601 string (yyyy-MM-dd)

    Args:
        value: str, date or datetime

    Returns:
        datetime.date

    Raises:
        ValueError: if the value is empty or not a calendar date
    """
    if isinstance(value, (date, datetime)):
        return _as_date(value)
    if not isinstance(value, str) or not value.strip():
        raise ValueError("LMP date is required")

    text = value.strip()
    try:
        return datetime.strptime(text, '%Y-%m-%d').date()
    except ValueError:
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def trimester_for_weeks(weeks):
    """Trimester (1, 2 or 3) for a completed-weeks count."""
    if weeks < SECOND_TRIMESTER_WEEK:
        return 1
    if weeks < THIRD_TRIMESTER_WEEK:
        return 2
    return 3


def calculate_edd_from_lmp(lmp_date):
    """Estimated Due Date from LMP (Naegele's rule: LMP + 280 days)"""
    return _as_date(lmp_date) + timedelta(days=FULL_TERM_DAYS)


def compute(lmp, now):
    """
    Calculate Gestational Age from Last Menstrual Period (LMP)

    Both arguments are reduced to calendar dates, so time of day never
    shifts the result. A future LMP yields negative totals; weeks and days
    use floor division, so days stays within 0..6.

    Args:
        lmp: LMP date (date, datetime or ISO string)
        now: reference date (date, datetime or ISO string)

    Returns:
        GestationalAgeResult
    """
    lmp_date = _as_date(lmp)
    today = _as_date(now)

    total_days = (today - lmp_date).days
    weeks = total_days // 7
    days = total_days % 7

    return GestationalAgeResult(
        weeks=weeks,
        days=days,
        total_days=total_days,
        trimester=trimester_for_weeks(weeks),
        due_date=calculate_edd_from_lmp(lmp_date),
        is_overdue=total_days > FULL_TERM_DAYS,
    )


def compute_today(lmp):
    """compute() against the system date."""
    return compute(lmp, date.today())
