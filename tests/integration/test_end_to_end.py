"""End-to-end tests from raw sheet text to a serialized shortlist.

These exercise the real parser, engine, selector and payload helpers
together; only the network is replaced.
"""

import json
from unittest.mock import MagicMock, Mock

import pytest

from hostel_picker.config import load_config
from hostel_picker.parsing import TableParser
from hostel_picker.pipeline import ShortlistPipeline
from hostel_picker.shortlist import ShortlistSelector, build_shortlist_payload, shortlist
from hostel_picker.sources import FileTableSource, SheetTableSource

from tests.helpers.fixture_source import FIXTURES_DIR


@pytest.fixture
def sheet_session(venues_csv):
    """Session whose GET returns the fixture sheet with a BOM and CRLF endings."""
    body = ("\ufeff" + venues_csv.replace("\n", "\r\n")).encode("utf-8")
    session = MagicMock()
    session.headers = {}
    session.get.return_value = Mock(status_code=200, reason="OK", content=body)
    return session


class TestEndToEnd:
    """Raw text to ranked, serialized shortlist."""

    def test_scenario_two_venues(self):
        """Test that the venue priced at the target ranks above a pricier one."""
        records = TableParser().parse("hostel_name,city,pricing\nAlpha,Lima,20\nBravo,Lima,45\n")
        top = shortlist(records, {"destination": "Lima", "maxPrice": 20})

        assert [c.record.text("hostel_name") for c in top] == ["Alpha", "Bravo"]
        assert [c.scores.price for c in top] == [100, 38]

    def test_empty_text_to_empty_shortlist(self):
        assert shortlist(TableParser().parse(""), {"destination": "Lima"}) == []

    def test_sheet_with_bom_and_crlf(self, sheet_session, venues):
        """Test that a fetched sheet parses the same as the clean fixture."""
        source = SheetTableSource("https://sheets.example.com/v.csv", session=sheet_session)
        records = TableParser().parse(source.fetch_table())

        assert records == venues

    def test_pipeline_from_file_with_fixture_config(self, lima_profile):
        """Test the configured pipeline against the fixture sheet."""
        app_config, _ = load_config(FIXTURES_DIR / "config.yaml")
        pipeline = ShortlistPipeline(app_config, FileTableSource(FIXTURES_DIR / "venues.csv"))

        run = pipeline.run(lima_profile)
        payload = build_shortlist_payload(run.result)

        assert [c["venue"]["hostel_name"] for c in payload["candidates"]] == [
            "Casa Loma",
            "Pisco Party House",
        ]
        # price weight 2.0 and nationality weight 0.0 from the fixture config
        assert payload["candidates"][0]["aggregate"] == 600.0
        assert json.loads(json.dumps(payload)) == payload

    def test_output_is_deterministic(self, venues_csv, lima_profile):
        """Test that identical input produces byte-identical payloads."""
        def run():
            records = TableParser().parse(venues_csv)
            result = ShortlistSelector(max_workers=3).select(records, dict(lima_profile, destination=""))
            return json.dumps(build_shortlist_payload(result), sort_keys=True)

        assert run() == run()
