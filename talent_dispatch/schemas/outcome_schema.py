"""Typed outcomes returned to the presentation layer."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from talent_dispatch.schemas.booking_schema import Booking, EnrichedBooking, StatusCounts
from talent_dispatch.schemas.talent_schema import SuggestedTalent


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    INVALID_TRANSITION = "invalid_transition"
    BOOKING_CLOSED = "booking_closed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BACKEND = "backend"


class OperationOutcome(BaseModel):
    """Result of a mutating desk operation."""

    success: bool
    message: str
    error_kind: Optional[ErrorKind] = None
    booking: Optional[Booking] = None

    @property
    def retryable(self) -> bool:
        return self.error_kind in (ErrorKind.BACKEND, ErrorKind.CONFLICT)


class SuggestionOutcome(BaseModel):
    """Result of a suggestion request. An empty list is still a success."""

    success: bool
    message: str
    error_kind: Optional[ErrorKind] = None
    talents: list[SuggestedTalent] = Field(default_factory=list)


class DeskSnapshot(BaseModel):
    """The listing the presentation layer renders after each fetch."""

    bookings: list[EnrichedBooking] = Field(default_factory=list)
    counts: StatusCounts = Field(default_factory=StatusCounts)
    service_types: list[str] = Field(default_factory=list)
