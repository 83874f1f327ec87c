"""Unit tests for shortlist payload helpers."""

import json

import pytest

from hostel_picker.shortlist import (
    ShortlistSelector,
    build_candidate_payload,
    build_shortlist_payload,
)


@pytest.fixture
def result(venues, lima_profile):
    return ShortlistSelector().select(venues, lima_profile)


class TestBuildCandidatePayload:
    """Tests for build_candidate_payload."""

    def test_basic_structure(self, result):
        payload = build_candidate_payload(result.candidates[0])

        assert set(payload) == {"venue", "scores", "aggregate"}
        assert payload["venue"]["hostel_name"] == "Casa Loma"
        assert payload["scores"]["nomad"] == 80
        assert payload["aggregate"] == 510.0

    def test_image_is_omitted_by_default(self, result):
        payload = build_candidate_payload(result.candidates[0])
        assert "hostel_img" not in payload["venue"]

    def test_custom_omit_fields(self, result):
        payload = build_candidate_payload(result.candidates[0], omit_fields=("pricing",))
        assert "pricing" not in payload["venue"]
        assert payload["venue"]["hostel_img"] == "https://img.example/casa.jpg"

    def test_json_cells_are_objects(self, result):
        payload = build_candidate_payload(result.candidates[0])
        assert payload["venue"]["country_info"] == {"Germany": 5, "Peru": 3}

    def test_rank_included_when_given(self, result):
        assert build_candidate_payload(result.candidates[0], rank=1)["rank"] == 1

    def test_payload_does_not_alias_record(self, result):
        """Test that editing the payload leaves the record untouched."""
        payload = build_candidate_payload(result.candidates[0])
        payload["venue"]["country_info"]["France"] = 1

        assert result.candidates[0].record.json("country_info") == {"Germany": 5, "Peru": 3}


class TestBuildShortlistPayload:
    """Tests for build_shortlist_payload."""

    def test_summary_fields(self, result):
        payload = build_shortlist_payload(result)

        assert payload["destination"] == "Lima"
        assert payload["used_fallback"] is False
        assert payload["matched_count"] == 2
        assert payload["pool_size"] == 2
        assert [c["rank"] for c in payload["candidates"]] == [1, 2]

    def test_is_json_serializable(self, result):
        text = json.dumps(build_shortlist_payload(result), ensure_ascii=False)
        assert json.loads(text)["candidates"][1]["venue"]["hostel_name"] == "Pisco Party House"
