"""Tests for features/scoring/db.py and seed_store.py (Postgres is mocked)."""

import json
from contextlib import contextmanager
from unittest import mock

import pytest

import seed_store
from features.scoring import ClientRequest, ScoreCalculator, ScoreResult
from features.scoring import db as score_db
from features.sheet_sync import NormalizedRow


@pytest.fixture
def cursor():
    cur = mock.MagicMock()

    @contextmanager
    def fake_get_cursor():
        yield cur

    with mock.patch.object(score_db, "get_cursor", fake_get_cursor):
        yield cur


class TestRecalculateScore:
    def test_uses_stored_requests_and_configured_weights(self, cursor):
        cursor.fetchall.return_value = [
            {"feature_id": 7, "client_tier": "enterprise", "request_count": 2, "client_name": "Acme"},
            {"feature_id": 7, "client_tier": "starter", "request_count": 5, "client_name": "Globex"},
        ]
        score = score_db.recalculate_score(7, ScoreCalculator())

        assert score.weighted_score == 11
        assert score.total_requests == 7

        params = cursor.execute.call_args_list[-1].args[1]
        assert params["feature_id"] == 7
        assert params["weighted_score"] == 11
        assert params["total_requests"] == 7
        assert json.loads(params["tier_breakdown"]) == {
            "enterprise": {"requests": 2, "weight": 3},
            "starter": {"requests": 5, "weight": 1},
        }

    def test_store_path_weighs_professional_by_configured_weight(self, cursor):
        cursor.fetchall.return_value = [
            {"feature_id": 1, "client_tier": "professional", "request_count": 1, "client_name": "A"},
            {"feature_id": 1, "client_tier": "professional", "request_count": 1, "client_name": "B"},
        ]
        score = score_db.recalculate_score(1, ScoreCalculator())
        # Sheet path would report 2 for the same clients
        assert score.weighted_score == 4

    def test_recalculate_all(self, cursor):
        cursor.fetchall.side_effect = [[{"id": 1}, {"id": 2}], [], []]
        assert score_db.recalculate_all_scores(ScoreCalculator()) == 2


def test_upsert_feature_returns_id(cursor):
    cursor.fetchone.return_value = {"id": 12}
    assert score_db.upsert_feature("Leave", "Blackout", "", None) == 12
    insert_params = cursor.execute.call_args_list[0].args[1]
    assert insert_params == ("Leave", "Blackout", None, None)


def test_add_client_request(cursor):
    score_db.add_client_request(ClientRequest(feature_id=3, client_tier="starter", client_name="Acme"),
                                source="sheet")
    assert cursor.execute.call_args.args[1] == (3, "starter", 1, "Acme", "sheet")


class TestSeedRows:
    def test_adds_requests_and_skips_existing(self):
        rows = [
            NormalizedRow(name="A", module="Leave", requested_clients=["Acme", " ", "Globex"]),
            NormalizedRow(name="B", module="Time", requested_clients=["Hooli"]),
        ]
        with mock.patch.object(seed_store, "score_db") as db:
            db.upsert_feature.side_effect = [1, 2]
            db.has_client_requests.side_effect = [False, True]
            db.recalculate_score.return_value = ScoreResult()
            result = seed_store.seed_rows(rows, ScoreCalculator())

        assert result == {"added": 1, "skipped": 1}
        added = [c.args[0] for c in db.add_client_request.call_args_list]
        assert [(r.feature_id, r.client_tier, r.client_name) for r in added] == [
            (1, "professional", "Acme"),
            (1, "professional", "Globex"),
        ]
        db.recalculate_score.assert_called_once()


def test_list_scored_features_returns_dicts(cursor):
    cursor.fetchall.return_value = [
        {"id": 1, "module": "Leave", "name": "A", "weighted_score": 6.0, "total_requests": 3},
    ]
    rows = score_db.list_scored_features()
    assert rows == [{"id": 1, "module": "Leave", "name": "A", "weighted_score": 6.0, "total_requests": 3}]
    assert "ORDER BY weighted_score DESC" in cursor.execute.call_args.args[0]
