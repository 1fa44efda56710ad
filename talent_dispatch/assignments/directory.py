"""
Booking directory: the read side of the assignments view.

Lists bookings newest first, joined with customer name and locality and,
when assigned, the talent's name, photo, and rate. Filtering and the
dashboard counts are pure functions over that listing; there is no
separate source of truth for statistics.
"""

import logging
from typing import Iterable, Optional

from talent_dispatch.repository.base import BookingRepository
from talent_dispatch.schemas.booking_schema import (
    Booking,
    BookingFilter,
    BookingStatus,
    EnrichedBooking,
    StatusCounts,
)
from talent_dispatch.utils import norm

logger = logging.getLogger(__name__)

ALL = "all"


def _active(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() != ALL


def matches_filter(booking: EnrichedBooking, booking_filter: BookingFilter) -> bool:
    """Search is a case-insensitive substring test; status and service are exact."""
    if booking_filter.search and booking_filter.search.strip():
        term = norm(booking_filter.search)
        haystacks = (booking.customer_name, booking.service_type, booking.service_address)
        if not any(term in norm(h) for h in haystacks):
            return False
    if _active(booking_filter.status) and booking.status.value != booking_filter.status.strip().lower():
        return False
    if _active(booking_filter.service_type) and booking.service_type != booking_filter.service_type:
        return False
    return True


def apply_filter(
    bookings: Iterable[EnrichedBooking], booking_filter: Optional[BookingFilter] = None
) -> list[EnrichedBooking]:
    if booking_filter is None:
        return list(bookings)
    return [b for b in bookings if matches_filter(b, booking_filter)]


def status_counts(bookings: Iterable[Booking]) -> StatusCounts:
    """Reduce a listing to per-status dashboard counts."""
    counts = StatusCounts()
    with_talent = 0
    for booking in bookings:
        counts.total += 1
        if booking.has_talent:
            with_talent += 1
        if booking.status == BookingStatus.PENDING:
            counts.pending += 1
        elif booking.status == BookingStatus.ASSIGNED:
            counts.assigned += 1
        elif booking.status == BookingStatus.COMPLETED:
            counts.completed += 1
        elif booking.status == BookingStatus.CANCELLED:
            counts.cancelled += 1
    counts.unassigned = counts.total - with_talent
    return counts


def service_types(bookings: Iterable[Booking]) -> list[str]:
    """Distinct service types in first-seen order, for the filter dropdown."""
    seen: list[str] = []
    for booking in bookings:
        if booking.service_type not in seen:
            seen.append(booking.service_type)
    return seen


class BookingDirectory:
    """Reads and enriches the booking collection for the presentation layer."""

    def __init__(self, repository: BookingRepository) -> None:
        self._repository = repository

    async def list_bookings(
        self, booking_filter: Optional[BookingFilter] = None
    ) -> list[EnrichedBooking]:
        records = await self._repository.list_bookings()
        enriched = [
            EnrichedBooking.from_parts(r.booking, r.customer, r.talent) for r in records
        ]
        listed = apply_filter(enriched, booking_filter)
        logger.debug("Directory listed %d of %d booking(s)", len(listed), len(enriched))
        return listed
