from .patient import Patient
from .visit import Visit
from .user import User

__all__ = ["Patient", "Visit", "User"]
