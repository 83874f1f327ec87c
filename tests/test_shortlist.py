"""Unit tests for ShortlistSelector."""

import logging

import pytest

from hostel_picker.domain.models import Record
from hostel_picker.parsing import TableParser
from hostel_picker.scoring import ScoringEngine
from hostel_picker.shortlist import DEFAULT_TOP_K, ShortlistResult, ShortlistSelector, shortlist


def names(candidates):
    return [c.record.text("hostel_name") for c in candidates]


@pytest.fixture
def twin_records():
    """Five venues that score identically, so ranking must keep input order."""
    text = "hostel_name,city,pricing\n" + "".join(
        f"Venue {i},Arequipa,30\n" for i in range(1, 6)
    )
    return TableParser().parse(text)


class TestShortlistSelector:
    """Test suite for ShortlistSelector.select()."""

    def test_price_scenario(self):
        """Test that the cheaper-to-target venue ranks first."""
        records = TableParser().parse("hostel_name,city,pricing\nAlpha,Lima,20\nBravo,Lima,45\n")
        result = ShortlistSelector().select(records, {"destination": "Lima", "maxPrice": 20})

        assert names(result) == ["Alpha", "Bravo"]
        assert result.candidates[0].scores.price == 100
        assert result.candidates[1].scores.price == 38
        assert result.candidates[0].aggregate > result.candidates[1].aggregate

    def test_filters_by_destination(self, venues, lima_profile):
        """Test that only venues in the destination are ranked."""
        result = ShortlistSelector().select(venues, lima_profile)

        assert names(result) == ["Casa Loma", "Pisco Party House"]
        assert result.used_fallback is False
        assert result.matched_count == 2
        assert result.pool_size == 2
        assert result.destination == "Lima"
        assert [round(c.aggregate, 2) for c in result] == [510.0, 207.0]

    @pytest.mark.parametrize("destination", ["lima", "  LIMA ", "Lima"])
    def test_destination_is_case_and_whitespace_insensitive(self, venues, destination):
        result = ShortlistSelector().select(venues, {"destination": destination})
        assert result.matched_count == 2

    def test_location_internal_whitespace(self):
        """Test that repeated inner spaces do not prevent a match."""
        records = TableParser().parse("hostel_name,city\nHarbour,New  York\n")
        result = ShortlistSelector().select(records, {"destination": "new york"})
        assert result.used_fallback is False

    def test_fallback_takes_first_k_in_input_order(self, venues, lima_profile):
        """Test that with no destination match the pool is the head of the input."""
        profile = dict(lima_profile, destination="Paris")
        result = ShortlistSelector().select(venues, profile, k=2)

        # Nomad Base outscores Pisco for this profile but is third in the sheet
        assert names(result) == ["Casa Loma", "Pisco Party House"]
        assert result.used_fallback is True
        assert result.matched_count == 0
        assert result.pool_size == 2

    def test_fallback_pool_size(self, venues, lima_profile):
        """Test that a larger fallback pool lets later records compete."""
        profile = dict(lima_profile, destination="Paris")
        result = ShortlistSelector(fallback_pool_size=3).select(venues, profile, k=2)

        assert names(result) == ["Casa Loma", "Nomad Base"]
        assert result.pool_size == 3

    def test_empty_destination_uses_fallback(self, venues):
        """Test that no destination matches nothing and falls back."""
        result = ShortlistSelector().select(venues, {})
        assert result.used_fallback is True
        assert len(result) == 3

    def test_fallback_is_logged(self, venues, caplog):
        """Test that the fallback is observable in the logs."""
        caplog.set_level(logging.INFO, logger="hostel_picker.shortlist")

        ShortlistSelector().select(venues, {"destination": "Paris"})

        fallback = [r for r in caplog.records if getattr(r, "event", None) == "shortlist.fallback.used"]
        assert len(fallback) == 1
        assert fallback[0].levelno == logging.WARNING
        assert fallback[0].pool_size == 3

    def test_empty_records(self):
        """Test that an empty input yields an empty, non-fallback result."""
        result = ShortlistSelector().select([], {"destination": "Lima"})

        assert result.candidates == []
        assert result.is_empty
        assert result.used_fallback is False

    def test_ties_keep_input_order(self, twin_records):
        """Test that the sort is stable for equal aggregates."""
        result = ShortlistSelector().select(twin_records, {"destination": "Arequipa"}, k=3)
        assert names(result) == ["Venue 1", "Venue 2", "Venue 3"]

    def test_truncates_to_k(self, twin_records):
        assert len(ShortlistSelector(top_k=4).select(twin_records, {"destination": "Arequipa"})) == 4

    def test_candidates_wrap_original_records(self, venues, lima_profile):
        """Test that records are not copied or mutated."""
        before = [dict(r) for r in venues]
        result = ShortlistSelector().select(venues, lima_profile)

        assert result.candidates[0].record is venues[0]
        assert [dict(r) for r in venues] == before

    def test_accepts_plain_mappings(self):
        """Test that plain dict records are converted."""
        records = [
            {"hostel_name": "Alpha", "city": "Lima", "pricing": "45"},
            {"hostel_name": "Bravo", "city": "Lima", "pricing": "20"},
        ]
        result = ShortlistSelector().select(records, {"destination": "Lima", "maxPrice": 20})

        assert names(result) == ["Bravo", "Alpha"]
        assert isinstance(result.candidates[0].record, Record)

    def test_threaded_scoring_matches_sequential(self, venues, lima_profile):
        """Test that parallel scoring returns the same ranking."""
        profile = dict(lima_profile, destination="")
        sequential = ShortlistSelector().select(venues, profile)
        threaded = ShortlistSelector(max_workers=4).select(venues, profile)

        assert [(c.record, c.scores, c.aggregate) for c in threaded] == [
            (c.record, c.scores, c.aggregate) for c in sequential
        ]

    def test_custom_location_field(self):
        records = TableParser().parse("hostel_name,town\nAlpha,Lima\nBravo,Cusco\n")
        result = ShortlistSelector(location_field="town").select(records, {"destination": "Cusco"})
        assert names(result) == ["Bravo"]

    @pytest.mark.parametrize("k", [0, -1, True, 2.5])
    def test_invalid_k(self, venues, k):
        with pytest.raises(ValueError):
            ShortlistSelector().select(venues, {}, k=k)

    def test_invalid_constructor_sizes(self):
        with pytest.raises(ValueError):
            ShortlistSelector(top_k=0)
        with pytest.raises(ValueError):
            ShortlistSelector(fallback_pool_size=0)

    def test_contract_violations(self, venues):
        """Test that non-mapping profiles and records raise TypeError."""
        with pytest.raises(TypeError):
            ShortlistSelector().select(venues, "Lima")
        with pytest.raises(TypeError):
            ShortlistSelector().select(["Alpha"], {})

    def test_uses_given_engine(self, venues):
        engine = ScoringEngine()
        selector = ShortlistSelector(engine=engine)
        assert selector.engine is engine
        assert selector.location_field == "city"


class TestShortlistFunction:
    """Tests for the shortlist() convenience function."""

    def test_default_k(self):
        assert DEFAULT_TOP_K == 15

    def test_returns_candidates_list(self, venues, lima_profile):
        top = shortlist(venues, lima_profile, k=1)
        assert names(top) == ["Casa Loma"]

    def test_empty_input(self):
        """Test that empty text parses to nothing and shortlists to nothing."""
        assert shortlist(TableParser().parse(""), {"destination": "Lima"}) == []


def test_shortlist_result_defaults():
    result = ShortlistResult()
    assert list(result) == []
    assert len(result) == 0
    assert result.is_empty
