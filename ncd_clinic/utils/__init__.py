from .normalize import (
    empty_to_none,
    parse_int,
    parse_float,
    parse_date,
    parse_datetime,
    parse_id,
)

from .responses import error_response, server_error

__all__ = [
    # Normalization
    "empty_to_none",
    "parse_int",
    "parse_float",
    "parse_date",
    "parse_datetime",
    "parse_id",
    # Responses
    "error_response",
    "server_error",
]
