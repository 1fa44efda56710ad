from talent_dispatch.scheduling.calendar import CalendarMatcher, shift_week, time_slots, week_days
from talent_dispatch.scheduling.lifecycle import AssignmentAction, BookingLifecycle
from talent_dispatch.scheduling.time_parser import (
    ParsedTime,
    UnparseableTimeError,
    format_slot_label,
    normalize_hour,
    parse_time,
    try_normalize_hour,
)

__all__ = [
    "CalendarMatcher",
    "week_days",
    "shift_week",
    "time_slots",
    "BookingLifecycle",
    "AssignmentAction",
    "ParsedTime",
    "UnparseableTimeError",
    "parse_time",
    "normalize_hour",
    "try_normalize_hour",
    "format_slot_label",
]
