"""
Assignment desk: the view model behind the admin assignments screen.

The presentation layer forwards user intents here (search, filter,
suggest, assign, unassign, status changes) and renders what comes back.
Every error from the inner layers is turned into a typed outcome, so
the UI can show an actionable message without catching exceptions.
After a successful mutation the full listing is fetched again rather
than patched locally.
"""

import logging
from typing import Awaitable, Callable, Optional, Union

from talent_dispatch.assignments.directory import (
    BookingDirectory,
    apply_filter,
    service_types,
    status_counts,
)
from talent_dispatch.assignments.suggestions import TalentSuggestionEngine
from talent_dispatch.assignments.workflow import AssignmentWorkflow, Clock
from talent_dispatch.config import AppConfig, settings
from talent_dispatch.errors import (
    BackendError,
    BookingClosedError,
    ConcurrentUpdateError,
    DispatchError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from talent_dispatch.repository.base import BookingRepository
from talent_dispatch.schemas.booking_schema import Booking, BookingFilter, BookingStatus
from talent_dispatch.schemas.outcome_schema import (
    DeskSnapshot,
    ErrorKind,
    OperationOutcome,
    SuggestionOutcome,
)

logger = logging.getLogger(__name__)


def classify_error(exc: DispatchError) -> ErrorKind:
    """Map a subsystem error onto the outcome category the UI branches on."""
    if isinstance(exc, BookingClosedError):
        return ErrorKind.BOOKING_CLOSED
    if isinstance(exc, InvalidTransitionError):
        return ErrorKind.INVALID_TRANSITION
    if isinstance(exc, NotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, ConcurrentUpdateError):
        return ErrorKind.CONFLICT
    if isinstance(exc, ValidationError):
        return ErrorKind.VALIDATION
    return ErrorKind.BACKEND


class AssignmentDesk:
    """Presentation-facing facade over directory, suggestions, and workflow."""

    def __init__(
        self,
        repository: BookingRepository,
        config: Optional[AppConfig] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        cfg = config or settings
        self._repository = repository
        self.directory = BookingDirectory(repository)
        self.workflow = AssignmentWorkflow(repository, clock=clock)
        self.engine = TalentSuggestionEngine(repository, cfg.suggestions)
        self.snapshot = DeskSnapshot()
        self.booking_filter: Optional[BookingFilter] = None

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    async def refresh(self, booking_filter: Optional[BookingFilter] = None) -> OperationOutcome:
        """
        Re-fetch the listing. Counts and the service dropdown always cover
        the unfiltered collection; ``bookings`` is the filtered view.
        On failure the previous snapshot is kept.
        """
        if booking_filter is not None:
            self.booking_filter = booking_filter
        try:
            everything = await self.directory.list_bookings()
        except DispatchError as exc:
            logger.warning("Failed to load bookings: %s", exc)
            return OperationOutcome(
                success=False,
                error_kind=classify_error(exc),
                message=f"Failed to load bookings. {exc}",
            )

        self.snapshot = DeskSnapshot(
            bookings=apply_filter(everything, self.booking_filter),
            counts=status_counts(everything),
            service_types=service_types(everything),
        )
        return OperationOutcome(
            success=True,
            message=f"Loaded {len(self.snapshot.bookings)} of {len(everything)} booking(s).",
        )

    async def suggest_for(self, customer_city: str, service_type: str) -> SuggestionOutcome:
        """Suggestions for an explicit city and service."""
        try:
            talents = await self.engine.suggest(customer_city, service_type)
        except DispatchError as exc:
            logger.warning("Failed to fetch suggested talents: %s", exc)
            return SuggestionOutcome(
                success=False,
                error_kind=classify_error(exc),
                message=f"Failed to fetch suggested talents. {exc}",
            )
        if not talents:
            return SuggestionOutcome(
                success=True, message="No freelancers available for this service."
            )
        return SuggestionOutcome(
            success=True,
            message=f"{len(talents)} freelancer(s) found.",
            talents=talents,
        )

    async def suggest(self, booking_id: str) -> SuggestionOutcome:
        """Suggestions using the booking's service type and its customer's city."""
        try:
            booking = await self._repository.get_booking(booking_id)
            customer = (
                await self._repository.get_customer(booking.customer_id)
                if booking.customer_id else None
            )
        except DispatchError as exc:
            return SuggestionOutcome(
                success=False, error_kind=classify_error(exc), message=str(exc)
            )
        city = (customer.city_municipality or "") if customer else ""
        return await self.suggest_for(city, booking.service_type)

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #

    async def assign(self, booking_id: str, talent_id: str, actor_id: str,
                     expected_version: Optional[int] = None) -> OperationOutcome:
        return await self._mutate(
            lambda: self.workflow.assign(booking_id, talent_id, actor_id, expected_version),
            "Talent assigned successfully!",
            "Failed to assign talent.",
        )

    async def reassign(self, booking_id: str, talent_id: str, actor_id: str,
                       expected_version: Optional[int] = None) -> OperationOutcome:
        return await self._mutate(
            lambda: self.workflow.reassign(booking_id, talent_id, actor_id, expected_version),
            "Talent reassigned successfully!",
            "Failed to reassign talent.",
        )

    async def unassign(self, booking_id: str, actor_id: str,
                       expected_version: Optional[int] = None) -> OperationOutcome:
        return await self._mutate(
            lambda: self.workflow.unassign(booking_id, actor_id, expected_version),
            "Talent unassigned successfully!",
            "Failed to unassign talent.",
        )

    async def set_status(self, booking_id: str, status: Union[str, BookingStatus],
                         actor_id: str, expected_version: Optional[int] = None) -> OperationOutcome:
        return await self._mutate(
            lambda: self.workflow.set_status(booking_id, status, actor_id, expected_version),
            "Booking status updated.",
            "Failed to update booking status.",
        )

    async def mark_completed(self, booking_id: str, actor_id: str,
                             expected_version: Optional[int] = None) -> OperationOutcome:
        return await self._mutate(
            lambda: self.workflow.mark_completed(booking_id, actor_id, expected_version),
            "Booking marked as completed.",
            "Failed to complete booking.",
        )

    async def cancel(self, booking_id: str, reason: str, actor_id: str,
                     expected_version: Optional[int] = None) -> OperationOutcome:
        return await self._mutate(
            lambda: self.workflow.cancel(booking_id, reason, actor_id, expected_version),
            "Booking cancelled.",
            "Failed to cancel booking.",
        )

    async def _mutate(
        self,
        operation: Callable[[], Awaitable[Booking]],
        success_message: str,
        failure_message: str,
    ) -> OperationOutcome:
        try:
            booking = await operation()
        except DispatchError as exc:
            kind = classify_error(exc)
            log = logger.warning if isinstance(exc, BackendError) else logger.info
            log("%s (%s) %s", failure_message, kind.value, exc)
            return OperationOutcome(
                success=False, error_kind=kind, message=f"{failure_message} {exc}"
            )

        refreshed = await self.refresh()
        message = success_message
        if not refreshed.success:
            message += " The list could not be refreshed; reload to see the latest data."
        return OperationOutcome(success=True, message=message, booking=booking)
