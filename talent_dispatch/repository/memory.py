"""
In-memory booking store.

Backs the console demo and the test suite. Stored models are copied on
the way in and out, so callers only observe changes by re-reading, the
same as with a remote store.
"""

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Any, Callable, Iterable, Optional

from talent_dispatch.errors import (
    BookingClosedError,
    BookingNotFoundError,
    ConcurrentUpdateError,
    TalentNotFoundError,
)
from talent_dispatch.repository.base import check_writable
from talent_dispatch.schemas.booking_schema import Booking, BookingRecord
from talent_dispatch.schemas.customer_schema import Customer
from talent_dispatch.schemas.service_schema import ServiceCategory
from talent_dispatch.schemas.talent_schema import AssignedTalent, Talent, TalentStatus

logger = logging.getLogger(__name__)

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class InMemoryRepository:
    """Dict-backed implementation of BookingRepository."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._bookings: dict[str, Booking] = {}
        self._customers: dict[str, Customer] = {}
        self._talents: dict[str, Talent] = {}
        self._services: dict[str, ServiceCategory] = {}

    # ------------------------------------------------------------------ #
    # Loading
    # ------------------------------------------------------------------ #

    def add_booking(self, booking: Booking) -> Booking:
        if booking.created_at is None:
            booking = booking.model_copy(update={"created_at": self._clock()})
        self._bookings[booking.id] = booking.model_copy()
        return booking

    def add_customer(self, customer: Customer) -> None:
        self._customers[customer.id] = customer.model_copy()

    def add_talent(self, talent: Talent) -> None:
        self._talents[talent.id] = talent.model_copy()

    def add_service(self, service: ServiceCategory) -> None:
        self._services[service.id] = service.model_copy()

    def clear(self) -> None:
        """Drop all records. Used by test fixtures for isolation."""
        self._bookings.clear()
        self._customers.clear()
        self._talents.clear()
        self._services.clear()

    # ------------------------------------------------------------------ #
    # BookingRepository
    # ------------------------------------------------------------------ #

    async def list_bookings(self) -> list[BookingRecord]:
        ordered = sorted(
            self._bookings.values(),
            key=lambda b: b.created_at or _EPOCH,
            reverse=True,
        )
        records = []
        for booking in ordered:
            customer = self._customers.get(booking.customer_id or "")
            talent = self._talents.get(booking.assigned_talent_id or "")
            records.append(BookingRecord(
                booking=booking.model_copy(),
                customer=customer.model_copy() if customer else None,
                talent=AssignedTalent.from_talent(talent) if talent else None,
            ))
        return records

    async def get_booking(self, booking_id: str) -> Booking:
        booking = self._bookings.get(booking_id)
        if booking is None:
            raise BookingNotFoundError(booking_id)
        return booking.model_copy()

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        customer = self._customers.get(customer_id)
        return customer.model_copy() if customer else None

    async def get_talent(self, talent_id: str) -> Talent:
        talent = self._talents.get(talent_id)
        if talent is None:
            raise TalentNotFoundError(talent_id)
        return talent.model_copy()

    async def list_talents(
        self, statuses: Iterable[TalentStatus], service_type: Optional[str] = None
    ) -> list[Talent]:
        wanted = set(statuses)
        return [
            t.model_copy()
            for t in self._talents.values()
            if t.status in wanted and (service_type is None or service_type in t.services)
        ]

    async def list_services(self, active_only: bool = True) -> list[ServiceCategory]:
        services = [s for s in self._services.values() if s.is_active or not active_only]
        return [s.model_copy() for s in sorted(services, key=lambda s: s.sort_order)]

    async def update_booking(
        self,
        booking_id: str,
        changes: dict[str, Any],
        expected_version: Optional[int] = None,
        require_open: bool = False,
    ) -> Booking:
        check_writable(changes)
        current = self._bookings.get(booking_id)
        if current is None:
            raise BookingNotFoundError(booking_id)
        if require_open and current.is_closed:
            raise BookingClosedError(
                f"Booking {booking_id} was closed ({current.status.value}) "
                "before this change could be saved."
            )
        if expected_version is not None and current.version != expected_version:
            raise ConcurrentUpdateError(booking_id, expected_version)

        update = dict(changes)
        update.setdefault("version", current.version + 1)
        update.setdefault("updated_at", self._clock())
        stored = Booking.model_validate({**current.model_dump(), **update})
        self._bookings[booking_id] = stored
        logger.debug("Booking %s updated: %s", booking_id, sorted(changes))
        return stored.model_copy()


def seed_demo_data(repo: InMemoryRepository, today: Optional[date] = None) -> None:
    """Load a small catalog, customers, talents, and this week's bookings."""
    today = today or date.today()

    services = [
        ("svc-cleaning", "House Cleaning", "Sparkles"),
        ("svc-driving", "Driving", "Car"),
        ("svc-childcare", "Childcare", "Baby"),
        ("svc-eldercare", "Elder Care", "HeartHandshake"),
        ("svc-laundry", "Laundry", "Shirt"),
    ]
    for order, (sid, title, icon) in enumerate(services):
        repo.add_service(ServiceCategory(id=sid, title=title, icon_name=icon, sort_order=order))

    for cid, first, middle, last, city in [
        ("cust-1", "Ana", "Lopez", "Reyes", "Makati"),
        ("cust-2", "Ben", None, "Cruz", "Quezon City"),
        ("cust-3", "Carla", None, "Dizon", "Pasig"),
    ]:
        repo.add_customer(Customer(
            id=cid, first_name=first, middle_name=middle, last_name=last,
            city_municipality=city,
        ))

    for talent in [
        Talent(id="tal-1", full_name="Maria Santos", address="12 Ayala Ave, Makati",
               city="Makati", phone="09170000001",
               services=["House Cleaning", "Laundry"], hourly_rate="800",
               experience="5 years", status=TalentStatus.APPROVED),
        Talent(id="tal-2", full_name="Juan Cruz", address="45 Katipunan, Quezon",
               phone="09170000002", services=["Driving"], hourly_rate="1200",
               experience="8 years", status=TalentStatus.APPROVED),
        Talent(id="tal-3", full_name="Anna Reyes", address="8 Ortigas Center, Pasig",
               city="Pasig", phone="09170000003",
               services=["House Cleaning", "Elder Care"], hourly_rate="900",
               status=TalentStatus.PENDING),
        Talent(id="tal-4", full_name="Pedro Garcia", address="3 Rizal St, Makati",
               city="Makati", phone="09170000004", services=["House Cleaning"],
               status=TalentStatus.REJECTED),
    ]:
        repo.add_talent(talent)

    monday = today - timedelta(days=today.weekday())
    base = datetime.combine(monday, datetime.min.time(), tzinfo=timezone.utc)
    for i, (bid, cid, service, day_offset, time_text) in enumerate([
        ("bk-1001", "cust-1", "House Cleaning", 0, "8:00 am"),
        ("bk-1002", "cust-2", "Driving", 1, "2 PM"),
        ("bk-1003", "cust-3", "Elder Care", 2, "10:30 am"),
        ("bk-1004", "cust-1", "Laundry", 3, "1:00 pm"),
        ("bk-1005", "cust-2", "House Cleaning", 0, "8:15 am"),
    ]):
        repo.add_booking(Booking(
            id=bid,
            customer_id=cid,
            service_type=service,
            service_address=f"{10 + i} Sample St",
            booking_date=monday + timedelta(days=day_offset),
            booking_time=time_text,
            created_at=base + timedelta(minutes=i),
        ))
