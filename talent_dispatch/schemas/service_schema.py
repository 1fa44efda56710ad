"""Service catalog entries used to label calendar tabs."""

from pydantic import BaseModel

ALL_SERVICES_ID = "all"


class ServiceCategory(BaseModel):
    id: str
    title: str
    icon_name: str = "Home"
    is_active: bool = True
    sort_order: int = 0
