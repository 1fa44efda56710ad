"""
Weekly calendar matching for the bookings management view.

The admin calendar shows one tab per service category, each a grid of
seven days by hourly slots. A cell displays the booking for that service
whose date falls on the cell's day and whose time normalizes to the
cell's hour.

Known limitation: if two bookings share a cell, the first one in
iteration order is shown and the other is only reported in
``WeekGrid.hidden``.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

from talent_dispatch.config import settings
from talent_dispatch.errors import ServiceNotFoundError
from talent_dispatch.scheduling.time_parser import format_slot_label, try_normalize_hour
from talent_dispatch.schemas.booking_schema import Booking, WeekCell, WeekGrid
from talent_dispatch.schemas.service_schema import ALL_SERVICES_ID, ServiceCategory
from talent_dispatch.utils import norm

logger = logging.getLogger(__name__)

DayLike = Union[date, datetime]


def _as_day(value: DayLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def week_days(anchor: DayLike, week_start: Optional[str] = None) -> list[date]:
    """Return the seven days of the week containing ``anchor``."""
    start_name = (week_start or settings.calendar.week_start).lower()
    day = _as_day(anchor)
    if start_name == "monday":
        offset = day.weekday()
    elif start_name == "sunday":
        offset = (day.weekday() + 1) % 7
    else:
        raise ValueError(f"Unsupported week start: {week_start!r}")
    first = day - timedelta(days=offset)
    return [first + timedelta(days=i) for i in range(7)]


def shift_week(anchor: DayLike, weeks: int) -> date:
    """Move the calendar anchor by whole weeks (negative goes back)."""
    return _as_day(anchor) + timedelta(weeks=weeks)


def time_slots(
    first_hour: Optional[int] = None, last_hour: Optional[int] = None
) -> list[str]:
    """Hourly slot labels from ``first_hour`` to ``last_hour`` inclusive."""
    first = settings.calendar.first_slot_hour if first_hour is None else first_hour
    last = settings.calendar.last_slot_hour if last_hour is None else last_hour
    if first > last:
        raise ValueError(f"first_hour {first} is after last_hour {last}")
    return [format_slot_label(h) for h in range(first, last + 1)]


class CalendarMatcher:
    """Locates the booking occupying a (day, slot) cell for a service."""

    def __init__(self, services: Iterable[ServiceCategory]) -> None:
        self._services = {s.id: s for s in services}

    def service_title(self, service_id: str) -> Optional[str]:
        """Catalog title for ``service_id``; None for the all-services tab."""
        if service_id == ALL_SERVICES_ID:
            return None
        service = self._services.get(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)
        return service.title

    def bookings_for_service(
        self, service_id: str, bookings: Iterable[Booking]
    ) -> list[Booking]:
        """Bookings whose service type matches the catalog title, case-insensitively."""
        title = self.service_title(service_id)
        if title is None:
            return list(bookings)
        wanted = norm(title)
        return [b for b in bookings if norm(b.service_type) == wanted]

    def find_booking(
        self,
        day: DayLike,
        slot_label: str,
        service_id: str,
        bookings: Iterable[Booking],
    ) -> Optional[Booking]:
        """Return the first booking on ``day`` whose hour equals the slot's hour."""
        slot_hour = try_normalize_hour(slot_label)
        if slot_hour is None:
            return None
        return self._first_in_cell(
            _as_day(day), slot_hour, self.bookings_for_service(service_id, bookings)
        )

    def build_week_grid(
        self,
        anchor: DayLike,
        service_id: str,
        bookings: Iterable[Booking],
        slots: Optional[list[str]] = None,
        week_start: Optional[str] = None,
    ) -> WeekGrid:
        """Build the 7-day grid for one service tab."""
        days = week_days(anchor, week_start)
        labels = slots if slots is not None else time_slots()
        service_bookings = self.bookings_for_service(service_id, bookings)

        cells: list[list[WeekCell]] = []
        placed: set[str] = set()
        for label in labels:
            slot_hour = try_normalize_hour(label)
            row = []
            for day in days:
                booking = None
                if slot_hour is not None:
                    booking = self._first_in_cell(day, slot_hour, service_bookings)
                if booking is not None:
                    placed.add(booking.id)
                row.append(WeekCell(day=day, slot_label=label, booking=booking))
            cells.append(row)

        hidden = [
            b for b in service_bookings
            if b.id not in placed and days[0] <= b.booking_date <= days[-1]
        ]
        if hidden:
            logger.debug(
                "%d booking(s) for service %s not shown in week of %s",
                len(hidden), service_id, days[0].isoformat(),
            )
        return WeekGrid(service_id=service_id, days=days, slots=labels, cells=cells, hidden=hidden)

    @staticmethod
    def _first_in_cell(
        day: date, slot_hour: int, bookings: Iterable[Booking]
    ) -> Optional[Booking]:
        for booking in bookings:
            if booking.booking_date != day:
                continue
            if try_normalize_hour(booking.booking_time) == slot_hour:
                return booking
        return None
