"""Talent (service provider) models and suggestion projections."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TalentStatus(str, Enum):
    """Approval status set by an administrator."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class MatchBucket(str, Enum):
    """Display bucket derived from a match score."""
    PERFECT = "Perfect Match"
    GOOD = "Good Match"
    PARTIAL = "Partial Match"
    AVAILABLE = "Available"


class Talent(BaseModel):
    """An independent provider who can be matched to bookings."""
    id: str
    full_name: str
    address: str = ""
    city: Optional[str] = None
    phone: str = ""
    services: list[str] = Field(default_factory=list)
    hourly_rate: Optional[str] = None
    experience: Optional[str] = None
    status: TalentStatus = TalentStatus.PENDING
    is_available: bool = True
    profile_photo_url: Optional[str] = None


class AssignedTalent(BaseModel):
    """Talent summary shown on an assigned booking."""
    id: str
    full_name: str
    address: str = ""
    phone: str = ""
    profile_photo_url: Optional[str] = None
    hourly_rate: Optional[str] = None
    experience: Optional[str] = None

    @classmethod
    def from_talent(cls, talent: Talent) -> "AssignedTalent":
        return cls(
            id=talent.id,
            full_name=talent.full_name,
            address=talent.address,
            phone=talent.phone,
            profile_photo_url=talent.profile_photo_url,
            hourly_rate=talent.hourly_rate,
            experience=talent.experience,
        )


class SuggestedTalent(BaseModel):
    """Ranked candidate for a booking. Derived, never persisted."""
    talent_id: str
    full_name: str
    address: str = ""
    services: list[str] = Field(default_factory=list)
    profile_photo_url: Optional[str] = None
    hourly_rate: Optional[str] = None
    experience: Optional[str] = None
    is_available: bool = True
    match_score: int
    bucket: MatchBucket
