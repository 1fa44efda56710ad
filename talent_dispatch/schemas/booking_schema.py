"""Booking data models, lifecycle statuses, and directory projections."""

from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from talent_dispatch.schemas.customer_schema import Customer
from talent_dispatch.schemas.talent_schema import AssignedTalent
from talent_dispatch.utils import UNKNOWN_CUSTOMER


class BookingStatus(str, Enum):
    """Lifecycle status of a booking."""
    PENDING = "pending"
    ASSIGNED = "assigned"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (BookingStatus.COMPLETED, BookingStatus.CANCELLED)


class Booking(BaseModel):
    """A customer's request for a service at a date, time, and address."""

    id: str
    customer_id: Optional[str] = None
    service_type: str
    service_address: str = ""
    booking_date: date
    booking_time: str
    duration: Optional[str] = None
    special_instructions: Optional[str] = None
    status: BookingStatus = BookingStatus.PENDING
    assigned_talent_id: Optional[str] = None
    assigned_at: Optional[datetime] = None
    assigned_by: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    cancelled_by: Optional[str] = None
    cancellation_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0

    @field_validator("booking_date", mode="before")
    @classmethod
    def _reduce_to_calendar_day(cls, value: Any) -> Any:
        # Stored dates sometimes arrive as timestamps; only the day matters.
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, str) and len(value.strip()) > 10:
            return datetime.fromisoformat(value.strip().replace("Z", "+00:00")).date()
        return value

    @property
    def is_closed(self) -> bool:
        return self.status.is_terminal

    @property
    def has_talent(self) -> bool:
        return self.assigned_talent_id is not None


class EnrichedBooking(Booking):
    """Booking joined with denormalized customer and assigned-talent data."""

    customer_name: str = UNKNOWN_CUSTOMER
    customer_city: str = ""
    talent: Optional[AssignedTalent] = None

    @classmethod
    def from_parts(
        cls,
        booking: Booking,
        customer: Optional[Customer] = None,
        talent: Optional[AssignedTalent] = None,
    ) -> "EnrichedBooking":
        return cls(
            **booking.model_dump(),
            customer_name=customer.display_name if customer else UNKNOWN_CUSTOMER,
            customer_city=(customer.city_municipality or "") if customer else "",
            talent=talent if booking.assigned_talent_id else None,
        )


class BookingRecord(BaseModel):
    """A booking as read from persistence, with its joined rows."""

    booking: Booking
    customer: Optional[Customer] = None
    talent: Optional[AssignedTalent] = None


class BookingFilter(BaseModel):
    """Directory search and filter parameters. ``"all"`` disables a filter."""

    search: Optional[str] = None
    status: Optional[str] = None
    service_type: Optional[str] = None


class StatusCounts(BaseModel):
    """Per-status summary of a booking listing."""

    pending: int = 0
    assigned: int = 0
    completed: int = 0
    cancelled: int = 0
    total: int = 0
    unassigned: int = 0


class WeekCell(BaseModel):
    """One (day, hourly slot) cell of the weekly grid."""

    day: date
    slot_label: str
    booking: Optional[Booking] = None


class WeekGrid(BaseModel):
    """Seven days by N hourly slots for one service category."""

    service_id: str
    days: list[date]
    slots: list[str]
    cells: list[list[WeekCell]] = Field(default_factory=list)
    hidden: list[Booking] = Field(default_factory=list)

    def cell(self, day: date, slot_label: str) -> Optional[WeekCell]:
        for row in self.cells:
            for c in row:
                if c.day == day and c.slot_label == slot_label:
                    return c
        return None

    def placed_bookings(self) -> list[Booking]:
        return [c.booking for row in self.cells for c in row if c.booking is not None]
