"""Customer data model (read-only dependency of the assignment desk)."""

from pydantic import BaseModel
from typing import Optional

from talent_dispatch.utils import UNKNOWN_CUSTOMER, join_name


class Customer(BaseModel):
    """Customer record. Only name parts and locality matter here."""
    id: str
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    city_municipality: Optional[str] = None

    @property
    def display_name(self) -> str:
        name = join_name(self.first_name, self.middle_name, self.last_name)
        return name or UNKNOWN_CUSTOMER
