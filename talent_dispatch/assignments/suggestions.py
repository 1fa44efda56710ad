"""
Talent suggestion engine.

Ranks providers for a booking by service capability and locality:

    score = service points + locality points

    exact city match  -> perfect threshold (100)  "Perfect Match"
    partial locality  -> good threshold (75)      "Good Match"
    service only      -> partial threshold (50)   "Partial Match"
    below partial     -> "Available" (only from externally supplied scores)

The pool is every approved or pending talent whose services list
contains the requested service title exactly; rejected talents are
never suggested. An empty pool is a normal outcome, not an error.
"""

import logging
import re
from typing import Optional

from talent_dispatch.config import SuggestionConfig, settings
from talent_dispatch.errors import ValidationError
from talent_dispatch.repository.base import BookingRepository
from talent_dispatch.schemas.talent_schema import (
    MatchBucket,
    SuggestedTalent,
    Talent,
    TalentStatus,
)
from talent_dispatch.utils import is_blank, norm

logger = logging.getLogger(__name__)

# Words too generic to count as a shared locality signal.
_LOCALITY_STOPWORDS = frozenset({
    "city", "municipality", "town", "street", "st", "ave", "avenue",
    "road", "rd", "the", "of", "and", "barangay", "brgy", "province",
})
MIN_LOCALITY_TOKEN = 3


def match_bucket(score: int, config: Optional[SuggestionConfig] = None) -> MatchBucket:
    """Classify a match score into its display bucket."""
    cfg = config or settings.suggestions
    if score >= cfg.perfect_threshold:
        return MatchBucket.PERFECT
    if score >= cfg.good_threshold:
        return MatchBucket.GOOD
    if score >= cfg.partial_threshold:
        return MatchBucket.PARTIAL
    return MatchBucket.AVAILABLE


def _locality_tokens(text: str) -> set[str]:
    return {
        tok for tok in re.findall(r"[a-z0-9]+", norm(text))
        if len(tok) >= MIN_LOCALITY_TOKEN and tok not in _LOCALITY_STOPWORDS
        and not tok.isdigit()
    }


def locality_segments(talent: Talent) -> list[str]:
    """Normalized place names a talent can be matched on: city, then address parts."""
    segments = [norm(talent.city)] if talent.city else []
    segments.extend(norm(part) for part in talent.address.split(","))
    return [s for s in segments if s]


def is_exact_locality(customer_city: str, talent: Talent) -> bool:
    city = norm(customer_city)
    return bool(city) and city in locality_segments(talent)


def is_partial_locality(customer_city: str, talent: Talent) -> bool:
    city = norm(customer_city)
    if not city:
        return False
    haystack = norm(" ".join([talent.city or "", talent.address]))
    if city in haystack:
        return True
    return bool(_locality_tokens(city) & _locality_tokens(haystack))


class TalentSuggestionEngine:
    """Builds the ranked candidate list shown in the talent selector."""

    def __init__(
        self,
        repository: BookingRepository,
        config: Optional[SuggestionConfig] = None,
    ) -> None:
        self._repository = repository
        self._config = config or settings.suggestions

    @property
    def eligible_statuses(self) -> list[TalentStatus]:
        if self._config.include_pending:
            return [TalentStatus.APPROVED, TalentStatus.PENDING]
        return [TalentStatus.APPROVED]

    def score(self, customer_city: str, service_type: str, talent: Talent) -> int:
        """Score one talent; 0 if it does not offer the service at all."""
        if service_type not in talent.services:
            return 0
        cfg = self._config
        if is_exact_locality(customer_city, talent):
            return cfg.perfect_threshold
        if is_partial_locality(customer_city, talent):
            return cfg.good_threshold
        return cfg.partial_threshold

    async def suggest(self, customer_city: str, service_type: str) -> list[SuggestedTalent]:
        """
        Return eligible talents for ``service_type`` ranked for ``customer_city``.

        Raises:
            ValidationError: If ``service_type`` is blank.
            BackendError: If the talent pool cannot be read.
        """
        if is_blank(service_type):
            raise ValidationError("A service type is required to suggest talents.")

        eligible = set(self.eligible_statuses)
        pool = await self._repository.list_talents(self.eligible_statuses, service_type)
        suggestions = []
        for talent in pool:
            if talent.status not in eligible or service_type not in talent.services:
                continue
            score = self.score(customer_city or "", service_type, talent)
            suggestions.append(SuggestedTalent(
                talent_id=talent.id,
                full_name=talent.full_name,
                address=talent.address,
                services=list(talent.services),
                profile_photo_url=talent.profile_photo_url,
                hourly_rate=talent.hourly_rate,
                experience=talent.experience,
                is_available=talent.is_available,
                match_score=score,
                bucket=match_bucket(score, self._config),
            ))

        suggestions.sort(key=lambda s: (-s.match_score, not s.is_available, s.full_name.lower()))
        if self._config.max_results:
            suggestions = suggestions[: self._config.max_results]

        logger.info(
            "Suggested %d talent(s) for '%s' near '%s'",
            len(suggestions), service_type, customer_city,
        )
        return suggestions
