"""
Loose time-of-day parsing for booking times and calendar slot labels.

Booking times are free text entered by customers ("8:00 am", "2 PM",
"12pm", "14:00"). Matching against the weekly grid is hour-granular, so
the parser reduces every accepted form to a 24-hour hour. Inputs it does
not recognize raise UnparseableTimeError instead of being guessed at.

Usage:
    normalize_hour("8:30 am")       # -> 8
    normalize_hour("12:00 am")      # -> 0
    try_normalize_hour("noon")      # -> None
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(
    r"^(?P<hour>\d{1,2})"
    r"(?::(?P<minute>\d{2}))?"
    r"(?::\d{2})?"
    r"\s*(?:(?P<meridiem>[ap])\.?\s?m\.?)?$",
    re.IGNORECASE,
)


class UnparseableTimeError(ValueError):
    """Raised when a time string matches none of the accepted patterns."""

    def __init__(self, time_text: Optional[str]) -> None:
        super().__init__(f"Unrecognized time of day: {time_text!r}")
        self.time_text = time_text


@dataclass(frozen=True)
class ParsedTime:
    """A time of day on the 24-hour clock."""
    hour: int
    minute: int = 0


def parse_time(time_text: Optional[str]) -> ParsedTime:
    """
    Parse ``H``, ``H:MM`` or ``H:MM:SS`` with an optional am/pm marker.

    With a meridiem the hour must be 1..12; without one the text is read
    as a 24-hour clock (0..23).

    Raises:
        UnparseableTimeError: If the text is empty or not a recognized form.
    """
    if time_text is None:
        raise UnparseableTimeError(time_text)

    match = _TIME_PATTERN.match(time_text.strip())
    if not match:
        raise UnparseableTimeError(time_text)

    hour = int(match.group("hour"))
    minute = int(match.group("minute") or 0)
    meridiem = (match.group("meridiem") or "").lower()

    if minute > 59:
        raise UnparseableTimeError(time_text)

    if meridiem:
        if not 1 <= hour <= 12:
            raise UnparseableTimeError(time_text)
        if meridiem == "p" and hour != 12:
            hour += 12
        elif meridiem == "a" and hour == 12:
            hour = 0
    elif hour > 23:
        raise UnparseableTimeError(time_text)

    return ParsedTime(hour=hour, minute=minute)


def normalize_hour(time_text: Optional[str]) -> int:
    """Return the 24-hour hour (0..23) for a loosely formatted time string."""
    return parse_time(time_text).hour


def try_normalize_hour(time_text: Optional[str]) -> Optional[int]:
    """Like normalize_hour, but returns None for unparseable input."""
    try:
        return normalize_hour(time_text)
    except UnparseableTimeError:
        logger.debug("Unparseable time %r treated as no match", time_text)
        return None


def format_slot_label(hour: int) -> str:
    """Render a 24-hour hour as a grid slot label, e.g. 14 -> "2 PM"."""
    if not 0 <= hour <= 23:
        raise ValueError(f"Hour must be between 0 and 23, got {hour}")
    suffix = "AM" if hour < 12 else "PM"
    display = hour % 12 or 12
    return f"{display} {suffix}"
