"""
Service-layer errors.
Each carries the HTTP status the API layer answers with.
"""


class ClinicError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class ValidationError(ClinicError):
    """Missing or malformed input"""
    status_code = 400


class DuplicateError(ClinicError):
    """Uniqueness constraint violated (MRN, username)"""
    status_code = 400


class NotFoundError(ClinicError):
    status_code = 404
