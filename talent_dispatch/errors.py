"""
Error taxonomy for the assignment and scheduling subsystem.

Inner layers (workflow, engine, repositories) raise these; the
AssignmentDesk converts them into typed outcomes for the presentation
layer. Not-found is kept apart from transition errors so callers can
tell "doesn't exist" from "exists but can't transition".
"""


class DispatchError(Exception):
    """Base class for all subsystem errors."""


class ValidationError(DispatchError):
    """Malformed or missing input, rejected before any persistence call."""


class InvalidTransitionError(DispatchError):
    """Raised when an action is not valid from the booking's current status."""


class BookingClosedError(InvalidTransitionError):
    """Raised for any mutation attempted on a completed or cancelled booking."""


class NotFoundError(DispatchError):
    """A referenced entity does not exist."""


class BookingNotFoundError(NotFoundError):
    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking {booking_id} not found.")
        self.booking_id = booking_id


class TalentNotFoundError(NotFoundError):
    def __init__(self, talent_id: str) -> None:
        super().__init__(f"Talent {talent_id} not found.")
        self.talent_id = talent_id


class ServiceNotFoundError(NotFoundError):
    def __init__(self, service_id: str) -> None:
        super().__init__(f"Service {service_id} not found in catalog.")
        self.service_id = service_id


class ConcurrentUpdateError(DispatchError):
    """The booking changed since the caller last read it (version mismatch)."""

    def __init__(self, booking_id: str, expected_version: int) -> None:
        super().__init__(
            f"Booking {booking_id} was modified by someone else "
            f"(expected version {expected_version}). Refresh and try again."
        )
        self.booking_id = booking_id
        self.expected_version = expected_version


class BackendError(DispatchError):
    """Transient network or persistence failure. Safe for the user to retry."""
