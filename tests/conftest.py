"""Shared test fixtures and helpers."""

from datetime import date, datetime, timezone
from typing import Optional

import pytest

from talent_dispatch.assignments.desk import AssignmentDesk
from talent_dispatch.assignments.directory import BookingDirectory
from talent_dispatch.assignments.suggestions import TalentSuggestionEngine
from talent_dispatch.assignments.workflow import AssignmentWorkflow
from talent_dispatch.config import AppConfig, SuggestionConfig
from talent_dispatch.repository.memory import InMemoryRepository, seed_demo_data
from talent_dispatch.scheduling.calendar import CalendarMatcher
from talent_dispatch.scheduling.lifecycle import BookingLifecycle
from talent_dispatch.schemas.booking_schema import Booking, BookingStatus
from talent_dispatch.schemas.service_schema import ServiceCategory
from talent_dispatch.schemas.talent_schema import Talent, TalentStatus

# Wednesday; the seeded week runs Monday 2025-06-02 .. Sunday 2025-06-08.
TODAY = date(2025, 6, 4)
NOW = datetime(2025, 6, 4, 9, 30, tzinfo=timezone.utc)
ADMIN = "admin-1"


def fixed_clock() -> datetime:
    return NOW


@pytest.fixture
def repo():
    repository = InMemoryRepository(clock=fixed_clock)
    seed_demo_data(repository, TODAY)
    return repository


@pytest.fixture
def empty_repo():
    return InMemoryRepository(clock=fixed_clock)


@pytest.fixture
def workflow(repo):
    return AssignmentWorkflow(repo, clock=fixed_clock)


@pytest.fixture
def lifecycle():
    return BookingLifecycle()


@pytest.fixture
def suggestion_config():
    return SuggestionConfig(
        perfect_threshold=100,
        good_threshold=75,
        partial_threshold=50,
        include_pending=True,
        max_results=0,
    )


@pytest.fixture
def engine(repo, suggestion_config):
    return TalentSuggestionEngine(repo, suggestion_config)


@pytest.fixture
def directory(repo):
    return BookingDirectory(repo)


@pytest.fixture
def desk(repo, suggestion_config):
    return AssignmentDesk(repo, AppConfig(suggestions=suggestion_config), clock=fixed_clock)


@pytest.fixture
def services():
    return [
        ServiceCategory(id="svc-cleaning", title="House Cleaning", sort_order=0),
        ServiceCategory(id="svc-driving", title="Driving", sort_order=1),
        ServiceCategory(id="svc-childcare", title="Childcare", sort_order=2),
    ]


@pytest.fixture
def matcher(services):
    return CalendarMatcher(services)


def make_booking(
    booking_id: str = "bk-test",
    service_type: str = "House Cleaning",
    booking_date: date = TODAY,
    booking_time: str = "9:00 am",
    status: BookingStatus = BookingStatus.PENDING,
    assigned_talent_id: Optional[str] = None,
    customer_id: Optional[str] = None,
    **kwargs,
) -> Booking:
    """Helper to create a Booking with sensible defaults."""
    return Booking(
        id=booking_id,
        customer_id=customer_id,
        service_type=service_type,
        service_address=kwargs.pop("service_address", "1 Test St"),
        booking_date=booking_date,
        booking_time=booking_time,
        status=status,
        assigned_talent_id=assigned_talent_id,
        **kwargs,
    )


def make_talent(
    talent_id: str = "tal-test",
    full_name: str = "Test Talent",
    services: Optional[list[str]] = None,
    city: Optional[str] = None,
    address: str = "",
    status: TalentStatus = TalentStatus.APPROVED,
    is_available: bool = True,
) -> Talent:
    """Helper to create a Talent with sensible defaults."""
    return Talent(
        id=talent_id,
        full_name=full_name,
        services=services if services is not None else ["House Cleaning"],
        city=city,
        address=address,
        status=status,
        is_available=is_available,
    )
