"""
Assignment workflow: the only code path that mutates bookings.

Each operation validates its input, reads the booking, checks the move
against BookingLifecycle, and issues exactly one point update. The
booking returned is the one the repository stored, so callers always
see their own write. The acting administrator is an explicit argument
of every operation.

Writes are last-write-wins among open bookings unless the caller passes
``expected_version`` (the version it last read), in which case a
concurrent change is reported as ConcurrentUpdateError instead of being
overwritten. Every write is conditional on the booking still being open,
so a booking completed or cancelled meanwhile is never reopened.
"""

from datetime import datetime, timezone
from typing import Any, Callable, Optional, Union

from talent_dispatch.errors import ValidationError
from talent_dispatch.logging_context import acting_as, get_actor_logger
from talent_dispatch.repository.base import BookingRepository
from talent_dispatch.scheduling.lifecycle import AssignmentAction, BookingLifecycle
from talent_dispatch.schemas.booking_schema import Booking, BookingStatus
from talent_dispatch.schemas.talent_schema import TalentStatus
from talent_dispatch.utils import is_blank

logger = get_actor_logger(__name__)

Clock = Callable[[], datetime]

_CLEARED_ASSIGNMENT: dict[str, Any] = {
    "assigned_talent_id": None,
    "assigned_at": None,
    "assigned_by": None,
}


def _require(value: Optional[str], what: str) -> str:
    if is_blank(value):
        raise ValidationError(f"A {what} is required.")
    return value.strip()


def parse_status(status: Union[str, BookingStatus]) -> BookingStatus:
    """Coerce a status name into BookingStatus, rejecting unknown values."""
    if isinstance(status, BookingStatus):
        return status
    try:
        return BookingStatus((status or "").strip().lower())
    except ValueError:
        allowed = [s.value for s in BookingStatus]
        raise ValidationError(
            f"Unknown booking status {status!r}. Expected one of {allowed}."
        ) from None


class AssignmentWorkflow:
    """Guarded booking mutations: assign, reassign, unassign, status changes."""

    def __init__(
        self,
        repository: BookingRepository,
        clock: Optional[Clock] = None,
        lifecycle: Optional[BookingLifecycle] = None,
    ) -> None:
        self._repository = repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._lifecycle = lifecycle or BookingLifecycle()

    # ------------------------------------------------------------------ #
    # Assignment
    # ------------------------------------------------------------------ #

    async def assign(
        self,
        booking_id: str,
        talent_id: str,
        actor_id: str,
        expected_version: Optional[int] = None,
    ) -> Booking:
        """Bind a talent to a pending or assigned booking."""
        return await self._bind_talent(
            AssignmentAction.ASSIGN, booking_id, talent_id, actor_id, expected_version
        )

    async def reassign(
        self,
        booking_id: str,
        talent_id: str,
        actor_id: str,
        expected_version: Optional[int] = None,
    ) -> Booking:
        """Replace the talent on a booking, overwriting the previous binding."""
        return await self._bind_talent(
            AssignmentAction.REASSIGN, booking_id, talent_id, actor_id, expected_version
        )

    async def unassign(
        self,
        booking_id: str,
        actor_id: str,
        expected_version: Optional[int] = None,
    ) -> Booking:
        """Clear the talent binding and return the booking to pending."""
        booking_id = _require(booking_id, "booking id")
        actor_id = _require(actor_id, "acting administrator id")

        with acting_as(actor_id, booking_id):
            booking = await self._repository.get_booking(booking_id)
            status = self._lifecycle.next_status(booking, AssignmentAction.UNASSIGN)

            logger.info(
                "Unassigning talent %s from booking %s",
                booking.assigned_talent_id, booking_id,
            )
            return await self._write(
                booking, {**_CLEARED_ASSIGNMENT, "status": status}, expected_version
            )

    # ------------------------------------------------------------------ #
    # Status changes
    # ------------------------------------------------------------------ #

    async def set_status(
        self,
        booking_id: str,
        status: Union[str, BookingStatus],
        actor_id: str,
        expected_version: Optional[int] = None,
    ) -> Booking:
        """
        Set the status directly on an open booking.

        Moving to pending clears any assignment; moving to assigned needs
        a talent already bound; moving to cancelled stamps who and when.
        """
        booking_id = _require(booking_id, "booking id")
        requested = parse_status(status)
        actor_id = _require(actor_id, "acting administrator id")

        with acting_as(actor_id, booking_id):
            booking = await self._repository.get_booking(booking_id)
            new_status = self._lifecycle.next_status(
                booking, AssignmentAction.SET_STATUS, requested
            )

            changes: dict[str, Any] = {"status": new_status}
            if new_status == BookingStatus.PENDING:
                changes.update(_CLEARED_ASSIGNMENT)
            elif new_status == BookingStatus.CANCELLED:
                changes.update(cancelled_at=self._clock(), cancelled_by=actor_id)

            logger.info(
                "Booking %s status %s -> %s",
                booking_id, booking.status.value, new_status.value,
            )
            return await self._write(booking, changes, expected_version)

    async def mark_completed(
        self,
        booking_id: str,
        actor_id: str,
        expected_version: Optional[int] = None,
    ) -> Booking:
        """Close an assigned booking as completed."""
        booking_id = _require(booking_id, "booking id")
        actor_id = _require(actor_id, "acting administrator id")

        with acting_as(actor_id, booking_id):
            booking = await self._repository.get_booking(booking_id)
            status = self._lifecycle.next_status(booking, AssignmentAction.COMPLETE)

            logger.info(
                "Booking %s completed by talent %s", booking_id, booking.assigned_talent_id
            )
            return await self._write(booking, {"status": status}, expected_version)

    async def cancel(
        self,
        booking_id: str,
        reason: str,
        actor_id: str,
        expected_version: Optional[int] = None,
    ) -> Booking:
        """Cancel an open booking, recording the reason."""
        booking_id = _require(booking_id, "booking id")
        reason = _require(reason, "cancellation reason")
        actor_id = _require(actor_id, "acting administrator id")

        with acting_as(actor_id, booking_id):
            booking = await self._repository.get_booking(booking_id)
            status = self._lifecycle.next_status(booking, AssignmentAction.CANCEL)

            logger.info("Cancelling booking %s: %s", booking_id, reason)
            return await self._write(
                booking,
                {
                    "status": status,
                    "cancelled_at": self._clock(),
                    "cancelled_by": actor_id,
                    "cancellation_reason": reason,
                },
                expected_version,
            )

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    async def _bind_talent(
        self,
        action: AssignmentAction,
        booking_id: str,
        talent_id: str,
        actor_id: str,
        expected_version: Optional[int],
    ) -> Booking:
        booking_id = _require(booking_id, "booking id")
        talent_id = _require(talent_id, "talent id")
        actor_id = _require(actor_id, "acting administrator id")

        with acting_as(actor_id, booking_id):
            booking = await self._repository.get_booking(booking_id)
            status = self._lifecycle.next_status(booking, action)

            talent = await self._repository.get_talent(talent_id)
            if talent.status == TalentStatus.REJECTED:
                raise ValidationError(
                    f"Talent {talent.full_name} was rejected and cannot be assigned."
                )

            logger.info(
                "%s talent %s to booking %s (previous: %s)",
                action.value.capitalize(), talent_id, booking_id, booking.assigned_talent_id,
            )
            return await self._write(
                booking,
                {
                    "status": status,
                    "assigned_talent_id": talent_id,
                    "assigned_at": self._clock(),
                    "assigned_by": actor_id,
                },
                expected_version,
            )

    async def _write(
        self,
        booking: Booking,
        changes: dict[str, Any],
        expected_version: Optional[int],
    ) -> Booking:
        # The store bumps ``version``; the lifecycle check above only holds
        # if the booking is still open when the write lands.
        return await self._repository.update_booking(
            booking.id,
            {**changes, "updated_at": self._clock()},
            expected_version,
            require_open=True,
        )
