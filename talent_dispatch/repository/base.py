"""
Persistence boundary for the assignment subsystem.

Any store (relational, document, REST) that can read bookings with their
customer and talent, read talents by approval status and capability, and
apply point updates to a booking satisfies this protocol.
"""

from typing import Any, Iterable, Optional, Protocol

from talent_dispatch.schemas.booking_schema import Booking, BookingRecord
from talent_dispatch.schemas.customer_schema import Customer
from talent_dispatch.schemas.service_schema import ServiceCategory
from talent_dispatch.schemas.talent_schema import Talent, TalentStatus

# Booking columns the assignment workflow is allowed to write.
WRITABLE_BOOKING_FIELDS = frozenset({
    "status",
    "assigned_talent_id",
    "assigned_at",
    "assigned_by",
    "cancelled_at",
    "cancelled_by",
    "cancellation_reason",
    "updated_at",
    "version",
})


class BookingRepository(Protocol):
    async def list_bookings(self) -> list[BookingRecord]:
        """All bookings, newest first, joined with customer and assigned talent."""
        ...

    async def get_booking(self, booking_id: str) -> Booking:
        """Raises BookingNotFoundError if absent."""
        ...

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        ...

    async def get_talent(self, talent_id: str) -> Talent:
        """Raises TalentNotFoundError if absent."""
        ...

    async def list_talents(
        self, statuses: Iterable[TalentStatus], service_type: Optional[str] = None
    ) -> list[Talent]:
        """Talents in any of ``statuses`` whose services contain ``service_type`` exactly."""
        ...

    async def list_services(self, active_only: bool = True) -> list[ServiceCategory]:
        ...

    async def update_booking(
        self,
        booking_id: str,
        changes: dict[str, Any],
        expected_version: Optional[int] = None,
        require_open: bool = False,
    ) -> Booking:
        """
        Apply a single point update and return the stored booking.

        The version is bumped by the store. With ``require_open`` the write
        only applies while the stored booking is still pending or assigned,
        so a booking closed in the meantime is never reopened.

        Raises:
            BookingNotFoundError: If the booking does not exist.
            BookingClosedError: If ``require_open`` and the booking is closed.
            ConcurrentUpdateError: If ``expected_version`` is given and stale.
            BackendError: If the store did not apply the write.
        """
        ...


def check_writable(changes: dict[str, Any]) -> None:
    unknown = set(changes) - WRITABLE_BOOKING_FIELDS
    if unknown:
        raise ValueError(f"Booking fields not writable here: {sorted(unknown)}")
