"""
Visit Model
A single follow-up encounter recording vitals and labs for one patient.
"""
from ncd_clinic.extensions import db
from .base import TimestampMixin
from datetime import date

# Numeric clinical fields and the type they are stored as
INTEGER_FIELDS = ('systolic_bp', 'diastolic_bp', 'heart_rate', 'respiratory_rate', 'spo2')
FLOAT_FIELDS = (
    'temperature', 'blood_sugar_level', 'hba1c', 'creatinine',
    'cholesterol', 'triglycerides', 'weight',
)
TEXT_FIELDS = ('urinalysis', 'notes', 'complications')


class Visit(db.Model, TimestampMixin):
    """
    Visit model - belongs to exactly one Patient.

    visit_date is the clinical date of the encounter and is what reports
    window on; created_at only records when the row was written.
    """
    __tablename__ = 'visits'

    id = db.Column(db.Integer, primary_key=True)
    patient_id = db.Column(
        db.Integer,
        db.ForeignKey('patients.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
    visit_date = db.Column(db.Date, nullable=False, default=date.today, index=True)

    # Vitals
    systolic_bp = db.Column(db.Integer)
    diastolic_bp = db.Column(db.Integer)
    heart_rate = db.Column(db.Integer)
    temperature = db.Column(db.Float)
    respiratory_rate = db.Column(db.Integer)
    spo2 = db.Column(db.Integer)
    weight = db.Column(db.Float)

    # Labs
    blood_sugar_level = db.Column(db.Float)
    hba1c = db.Column(db.Float)
    creatinine = db.Column(db.Float)
    cholesterol = db.Column(db.Float)
    triglycerides = db.Column(db.Float)
    urinalysis = db.Column(db.Text)

    notes = db.Column(db.Text)
    complications = db.Column(db.Text)

    def __repr__(self):
        return f"<Visit {self.id} - Patient: {self.patient_id} - Date: {self.visit_date}>"

    def to_dict(self, patient_name=None):
        """Convert to dictionary for API responses"""
        data = {
            'id': self.id,
            'patient_id': self.patient_id,
            'visit_date': self.visit_date.isoformat() if self.visit_date else None,
        }
        for field in INTEGER_FIELDS + FLOAT_FIELDS + TEXT_FIELDS:
            data[field] = getattr(self, field)
        data['created_at'] = self.created_at.isoformat() if self.created_at else None
        data['updated_at'] = self.updated_at.isoformat() if self.updated_at else None
        if patient_name is not None:
            data['patient_name'] = patient_name
        return data
