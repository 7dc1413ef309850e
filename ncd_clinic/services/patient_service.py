"""
Patient Service
Registration, update, lookup and cascading deletion of patients
"""
import logging
import random
import re
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError

from ncd_clinic.extensions import db
from ncd_clinic.exceptions import DuplicateError, NotFoundError, ValidationError
from ncd_clinic.models import Patient, Visit
from ncd_clinic.models.patient import CONDITIONS, GENDERS, PATIENT_TYPE_NEW, PATIENT_TYPE_REPEAT, PATIENT_TYPES
from ncd_clinic.utils.normalize import empty_to_none, parse_datetime, parse_int

logger = logging.getLogger(__name__)

MRN_PATTERN = re.compile(r'^\d{1,6}$')
MRN_MAX_ATTEMPTS = 20

OPTIONAL_TEXT_FIELDS = (
    'contact', 'region', 'zone', 'woreda', 'kebele',
    'treatment_type', 'diabetes_type', 'cvd_risk', 'cvd_treatment_type',
)


def generate_mrn() -> str:
    """Pseudo-random 6 digit medical record number"""
    return str(random.randint(100000, 999999))


def generate_unique_mrn() -> str:
    """Generate an MRN not used by any existing patient"""
    for _ in range(MRN_MAX_ATTEMPTS):
        mrn = generate_mrn()
        if not Patient.query.filter_by(mrn=mrn).first():
            return mrn
    raise DuplicateError('Could not generate a unique MRN, please try again')


def normalize_conditions(value) -> Optional[str]:
    """
    Accept a list or a comma separated string and return the stored form,
    e.g. ['Hypertension', 'Diabetes'] -> "Hypertension, Diabetes"
    """
    if value is None:
        return None
    if isinstance(value, str):
        items = value.split(',')
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        raise ValidationError('Field "conditions" must be a list or a comma separated string')

    names = []
    for item in items:
        if not isinstance(item, str):
            raise ValidationError('Field "conditions" must contain condition names')
        item = item.strip()
        if not item:
            continue
        match = next((c for c in CONDITIONS if c.lower() == item.lower()), None)
        if match is None:
            raise ValidationError(f'Unknown condition "{item}". Must be one of: {", ".join(CONDITIONS)}')
        if match not in names:
            names.append(match)
    return ', '.join(names) or None


def _validate_patient_fields(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate required fields and return the normalized mutable values"""
    name = empty_to_none(data.get('name'))
    if not name:
        raise ValidationError('Field "name" is required')

    if empty_to_none(data.get('age')) is None:
        raise ValidationError('Field "age" is required')
    age = parse_int('age', data.get('age'))
    if age < 1 or age > 99:
        raise ValidationError('Field "age" must be between 1 and 99')

    gender = empty_to_none(data.get('gender'))
    if not gender:
        raise ValidationError('Field "gender" is required')
    if gender not in GENDERS:
        raise ValidationError(f'Invalid gender. Must be one of: {", ".join(GENDERS)}')

    conditions = normalize_conditions(data.get('conditions'))
    if not conditions:
        raise ValidationError('At least one condition is required')

    patient_type = empty_to_none(data.get('patient_type')) or PATIENT_TYPE_NEW
    if patient_type not in PATIENT_TYPES:
        raise ValidationError(f'Invalid patient_type. Must be one of: {", ".join(PATIENT_TYPES)}')

    values = {
        'name': name,
        'age': age,
        'gender': gender,
        'conditions': conditions,
        'patient_type': patient_type,
    }
    for field in OPTIONAL_TEXT_FIELDS:
        values[field] = empty_to_none(data.get(field))
    return values


def _validate_mrn(mrn, exclude_id: Optional[int] = None) -> str:
    mrn = str(mrn).strip()
    if not MRN_PATTERN.match(mrn):
        raise ValidationError('MRN must be 1 to 6 digits')
    query = Patient.query.filter_by(mrn=mrn)
    if exclude_id is not None:
        query = query.filter(Patient.id != exclude_id)
    if query.first():
        raise DuplicateError('MRN already exists')
    return mrn


def _commit_or_duplicate():
    """Commit, turning a lost race on the MRN unique index into a 400"""
    try:
        db.session.commit()
    except IntegrityError:
        db.session.rollback()
        raise DuplicateError('MRN already exists')


def create_patient(data: Dict[str, Any]) -> Patient:
    """
    Register a new patient

    Args:
        data: request payload; mrn and created_at are optional

    Returns:
        Patient: the persisted patient
    """
    values = _validate_patient_fields(data)

    supplied_mrn = empty_to_none(data.get('mrn'))
    mrn = _validate_mrn(supplied_mrn) if supplied_mrn is not None else generate_unique_mrn()

    patient = Patient(mrn=mrn, **values)
    created_at = parse_datetime('created_at', data.get('created_at'))
    if created_at:
        patient.created_at = created_at

    db.session.add(patient)
    _commit_or_duplicate()
    logger.info(f"Registered patient {patient.id} (MRN {patient.mrn})")
    return patient


def update_patient(patient_id: int, data: Dict[str, Any]) -> Patient:
    """
    Replace all mutable fields of a patient.
    The primary key never changes and a Repeat patient stays Repeat.
    """
    patient = get_patient(patient_id)
    values = _validate_patient_fields(data)

    if patient.patient_type == PATIENT_TYPE_REPEAT:
        values['patient_type'] = PATIENT_TYPE_REPEAT

    supplied_mrn = empty_to_none(data.get('mrn'))
    if supplied_mrn is not None and str(supplied_mrn).strip() != patient.mrn:
        patient.mrn = _validate_mrn(supplied_mrn, exclude_id=patient.id)

    for field, value in values.items():
        setattr(patient, field, value)

    created_at = parse_datetime('created_at', data.get('created_at'))
    if created_at:
        patient.created_at = created_at

    _commit_or_duplicate()
    return patient


def get_patient(patient_id: int) -> Patient:
    patient = db.session.get(Patient, patient_id)
    if not patient:
        raise NotFoundError('Patient not found')
    return patient


def get_last_visit(patient_id: int):
    return db.session.query(func.max(Visit.visit_date)).filter(Visit.patient_id == patient_id).scalar()


def list_patients(search: Optional[str] = None) -> List[Tuple[Patient, Any]]:
    """
    Patients ordered by name, each paired with the date of their latest visit.
    search matches name, contact, conditions or MRN (case-insensitive, partial).
    """
    last_visits = (
        db.session.query(
            Visit.patient_id.label('patient_id'),
            func.max(Visit.visit_date).label('last_visit'),
        )
        .group_by(Visit.patient_id)
        .subquery()
    )
    query = (
        db.session.query(Patient, last_visits.c.last_visit)
        .outerjoin(last_visits, last_visits.c.patient_id == Patient.id)
    )

    search = (search or '').strip()
    if search:
        query = query.filter(or_(
            Patient.name.ilike(f'%{search}%'),
            Patient.contact.ilike(f'%{search}%'),
            Patient.conditions.ilike(f'%{search}%'),
            Patient.mrn.ilike(f'%{search}%'),
        ))

    return query.order_by(Patient.name.asc(), Patient.id.asc()).all()


def list_patient_visits(patient_id: int) -> List[Visit]:
    """Visit history of one patient, newest first"""
    patient = get_patient(patient_id)
    return patient.visits.order_by(Visit.visit_date.desc(), Visit.id.desc()).all()


def delete_patient(patient_id: int) -> int:
    """
    Delete a patient and all of their visits in one transaction.

    Returns:
        int: number of visits removed
    """
    patient = get_patient(patient_id)
    try:
        removed = Visit.query.filter_by(patient_id=patient_id).delete()
        db.session.delete(patient)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise
    logger.info(f"Deleted patient {patient_id} and {removed} visit(s)")
    return removed
