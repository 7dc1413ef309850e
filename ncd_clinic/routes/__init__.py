from .auth import auth_bp
from .patient import patient_bp
from .visit import visit_bp
from .health import health_bp
from .reporting import reporting_bp

__all__ = ['auth_bp', 'patient_bp', 'visit_bp', 'health_bp', 'reporting_bp']
