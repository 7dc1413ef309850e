from .patient_service import (
    create_patient,
    update_patient,
    get_patient,
    get_last_visit,
    list_patients,
    list_patient_visits,
    delete_patient,
)

from .visit_service import (
    create_visit,
    update_visit,
    get_visit,
    list_visits,
    delete_visit,
)

from .report_service import (
    ReportWindow,
    parse_window,
    build_summary,
    get_summary,
)

from .user_service import create_user, authenticate

__all__ = [
    # Patient Services
    "create_patient",
    "update_patient",
    "get_patient",
    "get_last_visit",
    "list_patients",
    "list_patient_visits",
    "delete_patient",
    # Visit Services
    "create_visit",
    "update_visit",
    "get_visit",
    "list_visits",
    "delete_visit",
    # Report Services
    "ReportWindow",
    "parse_window",
    "build_summary",
    "get_summary",
    # User Services
    "create_user",
    "authenticate",
]
