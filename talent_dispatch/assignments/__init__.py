from talent_dispatch.assignments.desk import AssignmentDesk, classify_error
from talent_dispatch.assignments.directory import (
    BookingDirectory,
    apply_filter,
    service_types,
    status_counts,
)
from talent_dispatch.assignments.suggestions import TalentSuggestionEngine, match_bucket
from talent_dispatch.assignments.workflow import AssignmentWorkflow

__all__ = [
    "AssignmentDesk",
    "AssignmentWorkflow",
    "BookingDirectory",
    "TalentSuggestionEngine",
    "apply_filter",
    "classify_error",
    "match_bucket",
    "service_types",
    "status_counts",
]
