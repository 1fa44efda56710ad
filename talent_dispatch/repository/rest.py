"""
REST (PostgREST-style) booking store.

Talks to the hosted database's REST endpoint: tables are resources,
filters are query params (``id=eq.X``), related rows are embedded with
``select=*,customers(...)``. Every call uses the configured timeout.
Nothing is retried here; a failed write is reported and left to the user.
"""

import logging
from datetime import date, datetime
from enum import Enum
from typing import Any, Iterable, Optional, TypeVar

import httpx
import pydantic

from talent_dispatch.config import settings
from talent_dispatch.errors import (
    BackendError,
    BookingClosedError,
    BookingNotFoundError,
    ConcurrentUpdateError,
    TalentNotFoundError,
)
from talent_dispatch.repository.base import check_writable
from talent_dispatch.schemas.booking_schema import Booking, BookingRecord, BookingStatus
from talent_dispatch.schemas.customer_schema import Customer
from talent_dispatch.schemas.service_schema import ServiceCategory
from talent_dispatch.schemas.talent_schema import AssignedTalent, Talent, TalentStatus

logger = logging.getLogger(__name__)

CUSTOMER_COLUMNS = "id,first_name,middle_name,last_name,city_municipality"
TALENT_COLUMNS = "id,full_name,address,phone,profile_photo_url,hourly_rate,experience"
BOOKING_SELECT = f"*,customers({CUSTOMER_COLUMNS}),talents({TALENT_COLUMNS})"
CLOSED_STATUSES = tuple(s.value for s in BookingStatus if s.is_terminal)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def _parse(model: type[ModelT], row: dict[str, Any]) -> ModelT:
    """Validate one backend row, turning schema drift into a BackendError."""
    try:
        return model.model_validate(row)
    except pydantic.ValidationError as e:
        logger.warning(
            "Backend returned an unreadable %s row %s: %s",
            model.__name__, row.get("id"), e.errors()[0].get("msg"),
        )
        raise BackendError(
            f"Backend returned {model.__name__} data this version cannot read."
        ) from e


def _parse_rows(model: type[ModelT], rows: list[dict[str, Any]]) -> list[ModelT]:
    parsed = []
    for row in rows:
        try:
            parsed.append(_parse(model, row))
        except BackendError:
            continue
    return parsed


def _to_wire(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


class RestRepository:
    """BookingRepository over httpx.AsyncClient."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = (base_url or settings.backend.url).rstrip("/")
        self._api_key = settings.backend.api_key if api_key is None else api_key
        self._timeout = timeout or settings.backend.timeout_seconds
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_key:
            headers["apikey"] = self._api_key
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[dict[str, str]] = None,
        payload: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        url = f"{self.base_url}/{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                resp = await client.request(
                    method,
                    url,
                    params=params,
                    json=payload,
                    headers={**self._headers(), **(headers or {})},
                )
                resp.raise_for_status()
                if resp.content:
                    return resp.json()
                return []
        except httpx.TimeoutException as e:
            logger.warning("Timeout calling backend: %s %s", method, url)
            raise BackendError(f"Timed out calling {path}. Please try again.") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning("Backend returned %s for %s %s", status, method, url)
            raise BackendError(
                f"Backend error {status} calling {path}: {e.response.text}"
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Backend unreachable: %s %s (%s)", method, url, e)
            raise BackendError(f"Could not reach backend for {path}. Please try again.") from e

    # ------------------------------------------------------------------ #
    # Reads
    # ------------------------------------------------------------------ #

    async def list_bookings(self) -> list[BookingRecord]:
        rows = await self._request(
            "GET", "bookings", params={"select": BOOKING_SELECT, "order": "created_at.desc"}
        )
        records = []
        for row in rows:
            try:
                records.append(self._record_from_row(row))
            except BackendError:
                # One legacy row (e.g. an old "confirmed" status) must not hide the rest.
                logger.warning("Skipping unreadable booking row %s", row.get("id"))
        return records

    async def get_booking(self, booking_id: str) -> Booking:
        rows = await self._request(
            "GET", "bookings", params={"select": "*", "id": f"eq.{booking_id}"}
        )
        if not rows:
            raise BookingNotFoundError(booking_id)
        return _parse(Booking, rows[0])

    async def get_customer(self, customer_id: str) -> Optional[Customer]:
        rows = await self._request(
            "GET", "customers", params={"select": CUSTOMER_COLUMNS, "id": f"eq.{customer_id}"}
        )
        return _parse(Customer, rows[0]) if rows else None

    async def get_talent(self, talent_id: str) -> Talent:
        rows = await self._request(
            "GET", "talents", params={"select": "*", "id": f"eq.{talent_id}"}
        )
        if not rows:
            raise TalentNotFoundError(talent_id)
        return _parse(Talent, rows[0])

    async def list_talents(
        self, statuses: Iterable[TalentStatus], service_type: Optional[str] = None
    ) -> list[Talent]:
        status_list = ",".join(s.value for s in statuses)
        params = {"select": "*", "status": f"in.({status_list})"}
        if service_type is not None:
            params["services"] = "cs.{" + _quote(service_type) + "}"
        rows = await self._request("GET", "talents", params=params)
        return _parse_rows(Talent, rows)

    async def list_services(self, active_only: bool = True) -> list[ServiceCategory]:
        params = {"select": "id,title,icon_name,is_active,sort_order", "order": "sort_order.asc"}
        if active_only:
            params["is_active"] = "eq.true"
        rows = await self._request("GET", "services", params=params)
        return _parse_rows(ServiceCategory, rows)

    # ------------------------------------------------------------------ #
    # Writes
    # ------------------------------------------------------------------ #

    async def update_booking(
        self,
        booking_id: str,
        changes: dict[str, Any],
        expected_version: Optional[int] = None,
        require_open: bool = False,
    ) -> Booking:
        """
        PATCH one booking row.

        The ``version`` column is only touched when ``expected_version`` is
        given, so unguarded writes work against tables without it.
        """
        check_writable(changes)
        params = {"id": f"eq.{booking_id}", "select": "*"}
        payload = {k: _to_wire(v) for k, v in changes.items()}
        if require_open:
            params["status"] = f"not.in.({','.join(CLOSED_STATUSES)})"
        if expected_version is not None:
            params["version"] = f"eq.{expected_version}"
            payload["version"] = expected_version + 1
        else:
            payload.pop("version", None)

        rows = await self._request(
            "PATCH",
            "bookings",
            params=params,
            payload=payload,
            headers={"Prefer": "return=representation"},
        )
        if rows:
            return _parse(Booking, rows[0])

        # Zero rows matched. Re-read to tell the caller which condition failed.
        current = await self.get_booking(booking_id)
        if require_open and current.is_closed:
            raise BookingClosedError(
                f"Booking {booking_id} was closed ({current.status.value}) "
                "before this change could be saved."
            )
        if expected_version is not None and current.version != expected_version:
            raise ConcurrentUpdateError(booking_id, expected_version)
        logger.warning("Backend matched no rows updating booking %s", booking_id)
        raise BackendError(
            f"The update to booking {booking_id} was not applied. Please try again."
        )

    @staticmethod
    def _record_from_row(row: dict[str, Any]) -> BookingRecord:
        customer_row = row.get("customers")
        talent_row = row.get("talents")
        return BookingRecord(
            booking=_parse(Booking, row),
            customer=_parse(Customer, customer_row) if customer_row else None,
            talent=_parse(AssignedTalent, talent_row) if talent_row else None,
        )
