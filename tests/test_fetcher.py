"""Tests for features/sheet_sync/fetcher.py."""

from unittest import mock

import pytest
import requests

import config
from features.sheet_sync.fetcher import SheetFetcher, SheetFetchError, SourceUnavailable
from tests.conftest import SHEET_CSV, make_response

URL = "https://docs.google.com/spreadsheets/d/abc/export?format=csv&gid=1"


def _fetcher(session, seed_path):
    return SheetFetcher(URL, seed_path, timeout=5, session=session)


class TestSheetSuccess:
    def test_rows_from_sheet(self, session, seed_file):
        session.get.return_value = make_response(SHEET_CSV)
        rows = _fetcher(session, seed_file).fetch_rows()

        assert [r.name for r in rows] == ["Blackout Periods", "Geo Punch"]
        assert rows[0].description == "No leave on\nthese dates"
        assert rows[0].requested_clients == ["Acme", "Globex", "Initech"]
        session.get.assert_called_once_with(URL, headers={"Accept": "text/csv"}, timeout=5)

    def test_bom_is_stripped(self, session, seed_file):
        session.get.return_value = make_response("\ufeff" + SHEET_CSV)
        rows = _fetcher(session, seed_file).fetch_rows()
        assert rows[0].name == "Blackout Periods"

    def test_every_call_refetches(self, session, seed_file):
        session.get.return_value = make_response(SHEET_CSV)
        fetcher = _fetcher(session, seed_file)
        fetcher.fetch_rows()
        fetcher.fetch_rows()
        assert session.get.call_count == 2


class TestFallback:
    def test_transport_error_falls_back_to_seed(self, session, seed_file):
        session.get.side_effect = requests.ConnectionError("boom")
        rows = _fetcher(session, seed_file).fetch_rows()
        assert [r.name for r in rows] == ["Seeded Feature", "Custom Fields"]
        assert session.get.call_count == 1

    def test_html_body_falls_back_to_seed(self, session, seed_file):
        session.get.return_value = make_response("  <!DOCTYPE html><html></html>")
        rows = _fetcher(session, seed_file).fetch_rows()
        assert rows and rows[0].name == "Seeded Feature"

    def test_non_success_status_falls_back(self, session, seed_file):
        session.get.return_value = make_response("Feature,Module\nA,B", status=404)
        rows = _fetcher(session, seed_file).fetch_rows()
        assert rows[0].name == "Seeded Feature"

    def test_no_valid_rows_falls_back(self, session, seed_file):
        session.get.return_value = make_response("Col A,Col B\nx,y\n")
        rows = _fetcher(session, seed_file).fetch_rows()
        assert rows[0].name == "Seeded Feature"

    def test_seed_is_returned_verbatim(self, session, seed_file):
        session.get.side_effect = requests.Timeout()
        rows = _fetcher(session, seed_file).fetch_rows()
        assert rows[1].point_of_contact == "Aisha"
        assert rows[1].requested_clients == []
        assert rows[0].requested_clients == ["Acme", "Globex"]

    def test_missing_seed_raises_source_unavailable(self, session, tmp_path):
        session.get.side_effect = requests.ConnectionError()
        with pytest.raises(SourceUnavailable):
            _fetcher(session, tmp_path / "missing.json").fetch_rows()

    def test_empty_seed_raises_source_unavailable(self, session, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text("[]")
        session.get.side_effect = requests.ConnectionError()
        with pytest.raises(SourceUnavailable):
            _fetcher(session, seed).fetch_rows()

    def test_corrupt_seed_raises_source_unavailable(self, session, tmp_path):
        seed = tmp_path / "seed.json"
        seed.write_text("{not json")
        session.get.side_effect = requests.ConnectionError()
        with pytest.raises(SourceUnavailable):
            _fetcher(session, seed).fetch_rows()


def test_fetch_csv_text_raises_on_html(session, seed_file):
    session.get.return_value = make_response("<html>")
    with pytest.raises(SheetFetchError, match="HTML"):
        _fetcher(session, seed_file).fetch_csv_text()


def test_seed_without_feature_objects_raises_source_unavailable(session, tmp_path):
    seed = tmp_path / "seed.json"
    seed.write_text('["Blackout Periods", 3, null]')
    with pytest.raises(SourceUnavailable, match="no features"):
        _fetcher(session, seed).load_fallback_seed()


def test_bundled_seed_has_named_features(session):
    rows = _fetcher(session, config.SEED_PATH).load_fallback_seed()
    assert rows
    assert all(r.name and r.module for r in rows)


class TestSessionLifecycle:
    def test_close_leaves_injected_session_open(self, session, seed_file):
        _fetcher(session, seed_file).close()
        session.close.assert_not_called()

    def test_close_releases_own_session(self, seed_file):
        with mock.patch.object(requests, "Session") as factory:
            SheetFetcher(URL, seed_file).close()
        factory.return_value.close.assert_called_once_with()
