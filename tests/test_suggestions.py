"""Tests for talent suggestion scoring and ranking."""

from dataclasses import replace

import pytest

from talent_dispatch.assignments.suggestions import (
    TalentSuggestionEngine,
    is_exact_locality,
    is_partial_locality,
    locality_segments,
    match_bucket,
)
from talent_dispatch.errors import ValidationError
from talent_dispatch.schemas.talent_schema import MatchBucket, TalentStatus
from tests.conftest import make_talent


class TestMatchBucket:
    @pytest.mark.parametrize("score,bucket", [
        (150, MatchBucket.PERFECT),
        (100, MatchBucket.PERFECT),
        (99, MatchBucket.GOOD),
        (75, MatchBucket.GOOD),
        (74, MatchBucket.PARTIAL),
        (50, MatchBucket.PARTIAL),
        (49, MatchBucket.AVAILABLE),
        (0, MatchBucket.AVAILABLE),
    ])
    def test_thresholds(self, suggestion_config, score, bucket):
        assert match_bucket(score, suggestion_config) == bucket

    def test_custom_thresholds(self, suggestion_config):
        cfg = replace(suggestion_config, perfect_threshold=90, good_threshold=60, partial_threshold=30)
        assert match_bucket(90, cfg) == MatchBucket.PERFECT
        assert match_bucket(60, cfg) == MatchBucket.GOOD
        assert match_bucket(30, cfg) == MatchBucket.PARTIAL


class TestLocality:
    def test_segments_include_city_and_address_parts(self):
        talent = make_talent(city="Makati", address="12 Ayala Ave, Makati City")
        assert locality_segments(talent) == ["makati", "12 ayala ave", "makati city"]

    def test_exact_is_case_and_space_insensitive(self):
        talent = make_talent(city="Quezon City")
        assert is_exact_locality("  quezon   CITY ", talent)

    def test_partial_on_shared_place_name(self):
        talent = make_talent(address="45 Katipunan, Quezon")
        assert not is_exact_locality("Quezon City", talent)
        assert is_partial_locality("Quezon City", talent)

    def test_generic_words_do_not_count(self):
        talent = make_talent(address="3 Main Street, Pasig City")
        assert not is_partial_locality("Makati City", talent)

    def test_blank_city_never_matches(self):
        talent = make_talent(city="Makati")
        assert not is_exact_locality("", talent)
        assert not is_partial_locality("  ", talent)


class TestScore:
    def test_exact_beats_partial_beats_service_only(self, engine):
        exact = make_talent(city="Makati")
        partial = make_talent(address="Bel-Air, Makati Central")
        elsewhere = make_talent(city="Cebu")
        s_exact = engine.score("Makati", "House Cleaning", exact)
        s_partial = engine.score("Makati", "House Cleaning", partial)
        s_elsewhere = engine.score("Makati", "House Cleaning", elsewhere)
        assert s_exact > s_partial > s_elsewhere > 0

    def test_exact_city_and_service_is_perfect(self, engine, suggestion_config):
        talent = make_talent(city="Makati")
        score = engine.score("Makati", "House Cleaning", talent)
        assert match_bucket(score, suggestion_config) == MatchBucket.PERFECT

    def test_service_not_offered_scores_zero(self, engine):
        talent = make_talent(city="Makati", services=["Driving"])
        assert engine.score("Makati", "House Cleaning", talent) == 0


class TestSuggest:
    @pytest.mark.asyncio
    async def test_ranked_for_seeded_pool(self, engine):
        results = await engine.suggest("Makati", "House Cleaning")
        assert [t.talent_id for t in results] == ["tal-1", "tal-3"]
        assert results[0].bucket == MatchBucket.PERFECT
        assert results[1].bucket == MatchBucket.PARTIAL

    @pytest.mark.asyncio
    async def test_rejected_talent_never_suggested(self, engine):
        results = await engine.suggest("Makati", "House Cleaning")
        assert "tal-4" not in {t.talent_id for t in results}

    @pytest.mark.asyncio
    async def test_partial_locality_is_good_match(self, engine):
        results = await engine.suggest("Quezon City", "Driving")
        assert len(results) == 1
        assert results[0].talent_id == "tal-2"
        assert results[0].match_score == 75
        assert results[0].bucket == MatchBucket.GOOD

    @pytest.mark.asyncio
    async def test_empty_pool_is_not_an_error(self, engine):
        assert await engine.suggest("Makati", "Childcare") == []

    @pytest.mark.asyncio
    async def test_blank_service_rejected(self, engine):
        with pytest.raises(ValidationError):
            await engine.suggest("Makati", "  ")

    @pytest.mark.asyncio
    async def test_missing_city_still_suggests(self, engine):
        results = await engine.suggest("", "House Cleaning")
        assert {t.match_score for t in results} == {50}

    @pytest.mark.asyncio
    async def test_pending_excluded_when_disabled(self, repo, suggestion_config):
        engine = TalentSuggestionEngine(repo, replace(suggestion_config, include_pending=False))
        results = await engine.suggest("Pasig", "House Cleaning")
        assert [t.talent_id for t in results] == ["tal-1"]

    @pytest.mark.asyncio
    async def test_ties_put_available_first_then_name(self, empty_repo, suggestion_config):
        empty_repo.add_talent(make_talent("t-1", "Zed", city="Pasig", is_available=True))
        empty_repo.add_talent(make_talent("t-2", "Amy", city="Pasig", is_available=False))
        empty_repo.add_talent(make_talent("t-3", "Bea", city="Pasig", is_available=True))
        empty_repo.add_talent(make_talent("t-4", "Cal", city="Cebu",
                                          status=TalentStatus.PENDING))
        engine = TalentSuggestionEngine(empty_repo, suggestion_config)
        results = await engine.suggest("Pasig", "House Cleaning")
        assert [t.full_name for t in results] == ["Bea", "Zed", "Amy", "Cal"]

    @pytest.mark.asyncio
    async def test_max_results(self, repo, suggestion_config):
        engine = TalentSuggestionEngine(repo, replace(suggestion_config, max_results=1))
        results = await engine.suggest("Makati", "House Cleaning")
        assert [t.talent_id for t in results] == ["tal-1"]

    @pytest.mark.asyncio
    async def test_service_title_must_match_exactly(self, engine):
        assert await engine.suggest("Makati", "house cleaning") == []
