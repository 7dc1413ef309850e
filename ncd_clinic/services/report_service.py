"""
Report Service
Aggregates patients and visits into the dashboard summary
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ncd_clinic.extensions import db
from ncd_clinic.exceptions import ValidationError
from ncd_clinic.models import Patient, Visit
from ncd_clinic.models.patient import PATIENT_TYPE_NEW, PATIENT_TYPE_REPEAT

logger = logging.getLogger(__name__)

HYPERTENSION = 'Hypertension'
DIABETES = 'Diabetes'

GENDER_KEYS = (('Male', 'male'), ('Female', 'female'), ('Other', 'other'))

# The month after the window must still be a valid date
MIN_YEAR = 1900
MAX_YEAR = 9998


@dataclass(frozen=True)
class ReportWindow:
    """A calendar month that reports are filtered to"""
    month: int
    year: int

    def date_bounds(self) -> Tuple[date, date]:
        """Half-open [first day of month, first day of next month)"""
        start = date(self.year, self.month, 1)
        if self.month == 12:
            end = date(self.year + 1, 1, 1)
        else:
            end = date(self.year, self.month + 1, 1)
        return start, end

    def datetime_bounds(self) -> Tuple[datetime, datetime]:
        start, end = self.date_bounds()
        return datetime(start.year, start.month, 1), datetime(end.year, end.month, 1)

    def to_dict(self) -> Dict[str, int]:
        return {'month': self.month, 'year': self.year}


def parse_window(month, year) -> Optional[ReportWindow]:
    """
    Build a window from query parameters.
    A window needs both month and year; with either missing the report is all-time.
    """
    if month in (None, '') or year in (None, ''):
        return None
    try:
        month = int(month)
        year = int(year)
    except (TypeError, ValueError):
        raise ValidationError('month and year must be numbers')
    if month < 1 or month > 12:
        raise ValidationError('month must be between 1 and 12')
    if year < MIN_YEAR or year > MAX_YEAR:
        raise ValidationError(f'year must be between {MIN_YEAR} and {MAX_YEAR}')
    return ReportWindow(month=month, year=year)


def _contains(conditions: Optional[str], condition: str) -> bool:
    if not conditions:
        return False
    return condition.lower() in conditions.lower()


def _gender_counts(patients: Iterable[Any]) -> Dict[str, int]:
    counts = {key: 0 for _, key in GENDER_KEYS}
    for p in patients:
        for gender, key in GENDER_KEYS:
            if p.gender == gender:
                counts[key] += 1
    return counts


def build_summary(patients: Iterable[Any], recent_visits: Iterable[Any] = ()) -> Dict[str, Any]:
    """
    Compute the dashboard summary from already-windowed rows.

    Args:
        patients: objects with patient_type, gender and conditions attributes
        recent_visits: (visit, patient_name) pairs, already ordered and limited

    Returns:
        dict: totals, condition buckets, gender distributions and recent visits
    """
    patients = list(patients)

    hypertension = [p for p in patients if _contains(p.conditions, HYPERTENSION)]
    diabetes = [p for p in patients if _contains(p.conditions, DIABETES)]
    hypertension_ids = {id(p) for p in hypertension}
    diabetes_ids = {id(p) for p in diabetes}

    both = len(hypertension_ids & diabetes_ids)

    return {
        'totalPatients': len(patients),
        'newPatients': sum(1 for p in patients if p.patient_type == PATIENT_TYPE_NEW),
        'repeatPatients': sum(1 for p in patients if p.patient_type == PATIENT_TYPE_REPEAT),
        'conditionCounts': {
            'hypertension_only': len(hypertension_ids - diabetes_ids),
            'diabetes_only': len(diabetes_ids - hypertension_ids),
            'both': both,
        },
        'genderDistribution': _gender_counts(patients),
        'genderByCondition': {
            'hypertension': _gender_counts(hypertension),
            'diabetes': _gender_counts(diabetes),
        },
        'recentVisits': [visit.to_dict(patient_name=name) for visit, name in recent_visits],
    }


def get_window_patients(window: Optional[ReportWindow]) -> List[Patient]:
    query = Patient.query
    if window is not None:
        start, end = window.datetime_bounds()
        query = query.filter(Patient.created_at >= start, Patient.created_at < end)
    return query.all()


def get_recent_visits(window: Optional[ReportWindow], limit: int) -> List[Tuple[Visit, str]]:
    """Most recent visits by visit_date, each with the owning patient's name"""
    query = db.session.query(Visit, Patient.name).join(Patient, Visit.patient_id == Patient.id)
    if window is not None:
        start, end = window.date_bounds()
        query = query.filter(Visit.visit_date >= start, Visit.visit_date < end)
    return query.order_by(Visit.visit_date.desc(), Visit.id.desc()).limit(limit).all()


def get_summary(window: Optional[ReportWindow] = None, limit: int = 10) -> Dict[str, Any]:
    """Load the windowed rows and build the summary"""
    patients = get_window_patients(window)
    visits = get_recent_visits(window, limit)
    summary = build_summary(patients, visits)
    summary['period'] = window.to_dict() if window else None
    logger.debug(f"Summary for {summary['period'] or 'all time'}: {summary['totalPatients']} patient(s)")
    return summary
