from ncd_clinic.extensions import db
from .base import TimestampMixin

GENDERS = ('Male', 'Female', 'Other')
CONDITIONS = ('Hypertension', 'Diabetes')
PATIENT_TYPE_NEW = 'New'
PATIENT_TYPE_REPEAT = 'Repeat'
PATIENT_TYPES = (PATIENT_TYPE_NEW, PATIENT_TYPE_REPEAT)


class Patient(db.Model, TimestampMixin):
    __tablename__ = 'patients'

    id = db.Column(db.Integer, primary_key=True)
    mrn = db.Column(db.String(6), unique=True, nullable=False, index=True)  # medical record number

    # Personal
    name = db.Column(db.String(200), nullable=False, index=True)
    age = db.Column(db.Integer)
    gender = db.Column(db.String(10))  # Male, Female, Other
    contact = db.Column(db.String(50))
    patient_type = db.Column(db.String(10), nullable=False, default=PATIENT_TYPE_NEW)  # New, Repeat
    conditions = db.Column(db.String(100))  # e.g. "Hypertension, Diabetes"

    # Address
    region = db.Column(db.String(100))
    zone = db.Column(db.String(100))
    woreda = db.Column(db.String(100))
    kebele = db.Column(db.String(100))

    # Treatment
    treatment_type = db.Column(db.String(200))
    diabetes_type = db.Column(db.String(50))
    cvd_risk = db.Column(db.String(50))
    cvd_treatment_type = db.Column(db.String(200))

    # Relationships
    visits = db.relationship('Visit', backref='patient', lazy='dynamic', passive_deletes=True)

    def has_condition(self, condition):
        """Substring match, so "Hypertension, Diabetes" has both"""
        if not self.conditions:
            return False
        return condition.lower() in self.conditions.lower()

    def mark_repeat(self):
        self.patient_type = PATIENT_TYPE_REPEAT

    def to_dict(self, last_visit=None):
        """Convert to dictionary for API responses"""
        return {
            'id': self.id,
            'mrn': self.mrn,
            'name': self.name,
            'age': self.age,
            'gender': self.gender,
            'contact': self.contact,
            'patient_type': self.patient_type,
            'conditions': self.conditions,
            'region': self.region,
            'zone': self.zone,
            'woreda': self.woreda,
            'kebele': self.kebele,
            'treatment_type': self.treatment_type,
            'diabetes_type': self.diabetes_type,
            'cvd_risk': self.cvd_risk,
            'cvd_treatment_type': self.cvd_treatment_type,
            'last_visit': last_visit.isoformat() if last_visit else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'updated_at': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Patient {self.name} (MRN {self.mrn})>"
