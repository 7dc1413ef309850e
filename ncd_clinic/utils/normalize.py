"""
Request payload normalization shared by the services.
Empty strings from HTML forms mean "no value" and become None.
"""
import math
from datetime import datetime, date

from ncd_clinic.exceptions import ValidationError


def empty_to_none(val):
    """Return None for None or a blank string; otherwise return value."""
    if val is None:
        return None
    if isinstance(val, str):
        val = val.strip()
        return val or None
    return val


def parse_int(field_name, value):
    value = empty_to_none(value)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f'Field "{field_name}" must be a whole number')
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f'Field "{field_name}" must be a whole number')
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'Field "{field_name}" must be a whole number')


def parse_float(field_name, value):
    value = empty_to_none(value)
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f'Field "{field_name}" must be a number')
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'Field "{field_name}" must be a number')
    # nan and inf parse as floats but cannot be written back as JSON
    if not math.isfinite(parsed):
        raise ValidationError(f'Field "{field_name}" must be a number')
    return parsed


def parse_date(field_name, value):
    """Parse an ISO date (or datetime) string to a date object"""
    value = empty_to_none(value)
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.fromisoformat(str(value)).date()
    except ValueError:
        try:
            return datetime.strptime(str(value)[:10], '%Y-%m-%d').date()
        except ValueError:
            raise ValidationError(f'Field "{field_name}" must be a date (YYYY-MM-DD)')


def parse_datetime(field_name, value):
    """Parse an ISO date or datetime string; a bare date means midnight"""
    value = empty_to_none(value)
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    text = str(value)
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f'Field "{field_name}" must be a date or datetime in ISO format')
    # Stored naive in UTC
    if parsed.tzinfo is not None:
        parsed = (parsed - parsed.utcoffset()).replace(tzinfo=None)
    return parsed


def parse_id(value, label):
    """Path ids arrive as strings; anything but a positive integer is a 400"""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid {label} ID')
    if parsed < 1:
        raise ValidationError(f'Invalid {label} ID')
    return parsed
