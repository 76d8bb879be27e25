"""Tests for features/scoring/calculator.py and models.py."""

import itertools

import pytest

from features.scoring import ClientRequest, ClientTier, ScoreCalculator, normalize_tier


def _req(tier, count=1, name=None):
    return ClientRequest(feature_id=1, client_tier=tier, request_count=count, client_name=name)


class TestNormalizeTier:
    def test_lowercases_and_collapses_whitespace(self):
        assert normalize_tier("  Enterprise   Plus ") == "enterprise_plus"

    def test_none_is_empty(self):
        assert normalize_tier(None) == ""


class TestScoreCalculator:
    def test_default_weights_example(self):
        score = ScoreCalculator().compute([_req("enterprise", 2), _req("starter", 5)])
        assert score.weighted_score == 11
        assert score.total_requests == 7
        assert score.tier_breakdown == {
            "enterprise": {"requests": 2, "weight": 3},
            "starter": {"requests": 5, "weight": 1},
        }

    def test_requests_in_same_tier_are_summed(self):
        score = ScoreCalculator().compute([_req("professional", 1), _req("professional", 3)])
        assert score.weighted_score == 8
        assert score.tier_breakdown == {"professional": {"requests": 4, "weight": 2}}

    def test_unknown_tier_weighs_one(self):
        score = ScoreCalculator().compute([_req("other", 4)])
        assert score.weighted_score == 4
        assert score.tier_breakdown["other"]["weight"] == 1

    def test_weight_lookup_is_normalized(self):
        calc = ScoreCalculator({"enterprise_plus": 5})
        assert calc.weight_for("Enterprise Plus") == 5
        assert calc.weight_for("ENTERPRISE") == 1

    def test_custom_table_replaces_defaults(self):
        calc = ScoreCalculator({"professional": 1})
        assert calc.weight_for("enterprise") == 1

    def test_empty_requests(self):
        score = ScoreCalculator().compute([])
        assert score.weighted_score == 0
        assert score.total_requests == 0
        assert score.tier_breakdown == {}

    def test_order_does_not_change_score(self):
        requests = [_req("enterprise", 2), _req("starter", 5), _req("professional", 3), _req("gold", 1)]
        calc = ScoreCalculator()
        expected = calc.compute(requests)
        for perm in itertools.permutations(requests):
            got = calc.compute(perm)
            assert got.weighted_score == expected.weighted_score
            assert got.total_requests == expected.total_requests
            assert got.tier_breakdown == expected.tier_breakdown


class TestClientRequest:
    def test_enum_tier_is_stored_as_value(self):
        assert _req(ClientTier.ENTERPRISE).client_tier == "enterprise"

    def test_count_must_be_positive(self):
        with pytest.raises(ValueError):
            _req("starter", 0)
