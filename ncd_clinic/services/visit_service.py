"""
Visit Service
Recording, editing and deleting clinical visits
"""
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from ncd_clinic.extensions import db
from ncd_clinic.exceptions import NotFoundError, ValidationError
from ncd_clinic.models import Patient, Visit
from ncd_clinic.models.visit import FLOAT_FIELDS, INTEGER_FIELDS, TEXT_FIELDS
from ncd_clinic.utils.normalize import empty_to_none, parse_date, parse_float, parse_id, parse_int

logger = logging.getLogger(__name__)


def _clinical_values(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Normalize the clinical fields of a payload.
    Empty strings mean "not measured" and become None; an explicit 0 stays 0.
    """
    values = {}
    for field in INTEGER_FIELDS:
        values[field] = parse_int(field, data.get(field))
    for field in FLOAT_FIELDS:
        values[field] = parse_float(field, data.get(field))
    for field in TEXT_FIELDS:
        values[field] = empty_to_none(data.get(field))
    return values


def create_visit(data: Dict[str, Any]) -> Visit:
    """
    Record a visit and mark the owning patient as a Repeat patient.

    Both writes happen in one transaction. The patient is marked Repeat
    whatever the visit date, including backfilled visits.
    """
    if empty_to_none(data.get('patient_id')) is None:
        raise ValidationError('Field "patient_id" is required')
    patient_id = parse_id(data.get('patient_id'), 'patient')

    patient = db.session.get(Patient, patient_id)
    if not patient:
        raise NotFoundError('Patient not found')

    visit = Visit(
        patient_id=patient.id,
        visit_date=parse_date('visit_date', data.get('visit_date')) or date.today(),
        **_clinical_values(data)
    )
    try:
        db.session.add(visit)
        patient.mark_repeat()
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info(f"Recorded visit {visit.id} for patient {patient.id}")
    return visit


def get_visit(visit_id: int) -> Visit:
    visit = db.session.get(Visit, visit_id)
    if not visit:
        raise NotFoundError('Visit not found')
    return visit


def update_visit(visit_id: int, data: Dict[str, Any]) -> Visit:
    """
    Replace the clinical fields of a visit.
    The owning patient cannot change; it stays (or becomes) Repeat.
    """
    visit = get_visit(visit_id)
    values = _clinical_values(data)
    visit_date = parse_date('visit_date', data.get('visit_date'))

    try:
        for field, value in values.items():
            setattr(visit, field, value)
        if visit_date:
            visit.visit_date = visit_date
        visit.patient.mark_repeat()
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    return visit


def list_visits(patient_id: Optional[int] = None, window=None) -> List[Visit]:
    """Visits newest first, optionally for one patient and/or within a window"""
    query = Visit.query
    if patient_id is not None:
        query = query.filter(Visit.patient_id == patient_id)
    if window is not None:
        start, end = window.date_bounds()
        query = query.filter(Visit.visit_date >= start, Visit.visit_date < end)
    return query.order_by(Visit.visit_date.desc(), Visit.id.desc()).all()


def delete_visit(visit_id: int) -> None:
    """Delete one visit. The patient keeps its Repeat status."""
    removed = Visit.query.filter_by(id=visit_id).delete()
    if removed == 0:
        db.session.rollback()
        raise NotFoundError('Visit not found')
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Deleted visit {visit_id}")
