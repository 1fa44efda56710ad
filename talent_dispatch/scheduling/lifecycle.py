"""
Booking lifecycle state machine.

    pending --assign--> assigned --complete--> completed
       |                   |
       +------cancel-------+--------cancel---> cancelled

Every (status, action) pair that is allowed is listed explicitly in
TRANSITIONS. Anything on a completed or cancelled booking is rejected
with BookingClosedError; anything else not listed raises
InvalidTransitionError naming the actions that are allowed.

Usage:
    lifecycle = BookingLifecycle()
    lifecycle.next_status(booking, AssignmentAction.ASSIGN)  # -> BookingStatus.ASSIGNED
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from talent_dispatch.errors import BookingClosedError, InvalidTransitionError
from talent_dispatch.schemas.booking_schema import Booking, BookingStatus

logger = logging.getLogger(__name__)


class AssignmentAction(str, Enum):
    """Mutations an administrator can apply to a booking."""
    ASSIGN = "assign"
    REASSIGN = "reassign"
    UNASSIGN = "unassign"
    SET_STATUS = "set_status"
    COMPLETE = "complete"
    CANCEL = "cancel"


Guard = Callable[[Booking, Optional[BookingStatus]], bool]


def _has_talent(booking: Booking, _requested: Optional[BookingStatus]) -> bool:
    return booking.has_talent


def _requested_status_allowed(booking: Booking, requested: Optional[BookingStatus]) -> bool:
    if requested is None:
        return False
    # "assigned" without a bound talent would break the assignment invariant.
    if requested == BookingStatus.ASSIGNED:
        return booking.has_talent
    return True


@dataclass(frozen=True)
class Transition:
    """A single allowed lifecycle move. ``to_status=None`` means the requested status."""
    action: AssignmentAction
    from_status: BookingStatus
    to_status: Optional[BookingStatus]
    guard: Optional[Guard] = None
    guard_message: str = ""


class BookingLifecycle:
    """Validates lifecycle moves against the explicit transition table."""

    TRANSITIONS: list[Transition] = [
        # --- Assignment ---
        Transition(AssignmentAction.ASSIGN, BookingStatus.PENDING, BookingStatus.ASSIGNED),
        Transition(AssignmentAction.ASSIGN, BookingStatus.ASSIGNED, BookingStatus.ASSIGNED),
        Transition(AssignmentAction.REASSIGN, BookingStatus.PENDING, BookingStatus.ASSIGNED),
        Transition(AssignmentAction.REASSIGN, BookingStatus.ASSIGNED, BookingStatus.ASSIGNED),
        Transition(AssignmentAction.UNASSIGN, BookingStatus.PENDING, BookingStatus.PENDING),
        Transition(AssignmentAction.UNASSIGN, BookingStatus.ASSIGNED, BookingStatus.PENDING),

        # --- Direct status changes ---
        Transition(AssignmentAction.SET_STATUS, BookingStatus.PENDING, None,
                   _requested_status_allowed,
                   "status 'assigned' requires a talent to be assigned first"),
        Transition(AssignmentAction.SET_STATUS, BookingStatus.ASSIGNED, None,
                   _requested_status_allowed,
                   "status 'assigned' requires a talent to be assigned first"),

        # --- Completion ---
        Transition(AssignmentAction.COMPLETE, BookingStatus.ASSIGNED, BookingStatus.COMPLETED,
                   _has_talent, "only bookings with an assigned talent can be completed"),

        # --- Cancellation ---
        Transition(AssignmentAction.CANCEL, BookingStatus.PENDING, BookingStatus.CANCELLED),
        Transition(AssignmentAction.CANCEL, BookingStatus.ASSIGNED, BookingStatus.CANCELLED),
    ]

    def next_status(
        self,
        booking: Booking,
        action: AssignmentAction,
        requested: Optional[BookingStatus] = None,
    ) -> BookingStatus:
        """
        Resolve the status ``action`` would move ``booking`` to.

        Raises:
            BookingClosedError: If the booking is completed or cancelled.
            InvalidTransitionError: If the action is not allowed from its status.
        """
        if booking.is_closed:
            raise BookingClosedError(
                f"Booking {booking.id} is closed ({booking.status.value}); "
                f"'{action.value}' is not allowed."
            )

        guard_failure = ""
        for t in self.TRANSITIONS:
            if t.action != action or t.from_status != booking.status:
                continue
            if t.guard is not None and not t.guard(booking, requested):
                guard_failure = t.guard_message
                continue
            to_status = t.to_status if t.to_status is not None else requested
            logger.debug(
                "Lifecycle: %s %s -> %s (booking %s)",
                action.value, booking.status.value, to_status.value, booking.id,
            )
            return to_status

        if guard_failure:
            raise InvalidTransitionError(
                f"Cannot {action.value} booking {booking.id}: {guard_failure}."
            )
        valid = [a.value for a in self.allowed_actions(booking)]
        raise InvalidTransitionError(
            f"No valid '{action.value}' transition from '{booking.status.value}' "
            f"for booking {booking.id}. Allowed actions: {valid}"
        )

    def can(self, booking: Booking, action: AssignmentAction,
            requested: Optional[BookingStatus] = None) -> bool:
        try:
            self.next_status(booking, action, requested)
        except InvalidTransitionError:
            return False
        return True

    def allowed_actions(self, booking: Booking) -> list[AssignmentAction]:
        """Actions whose transition exists from the booking's current status."""
        if booking.is_closed:
            return []
        seen: list[AssignmentAction] = []
        for t in self.TRANSITIONS:
            if t.from_status == booking.status and t.action not in seen:
                if t.action == AssignmentAction.COMPLETE and not booking.has_talent:
                    continue
                seen.append(t.action)
        return seen
