"""
Score Calculator — weighted score = sum over tiers of (requests * tier weight).

Tiers missing from the weight table weigh 1.
"""

from __future__ import annotations

import logging
from typing import Iterable

from config import DEFAULT_TIER_WEIGHTS
from features.scoring.models import ClientRequest, ScoreResult

log = logging.getLogger(__name__)

UNKNOWN_TIER_WEIGHT = 1


def normalize_tier(tier: str | None) -> str:
    """'Enterprise Plus ' -> 'enterprise_plus'."""
    return "_".join((tier or "").lower().split())


class ScoreCalculator:
    def __init__(self, tier_weights: dict | None = None):
        source = DEFAULT_TIER_WEIGHTS if tier_weights is None else tier_weights
        self.tier_weights = {normalize_tier(k): v for k, v in source.items()}

    def weight_for(self, tier: str | None) -> float:
        return self.tier_weights.get(normalize_tier(tier), UNKNOWN_TIER_WEIGHT)

    def compute(self, requests: Iterable[ClientRequest]) -> ScoreResult:
        totals: dict[str, int] = {}
        for req in requests:
            totals[req.client_tier] = totals.get(req.client_tier, 0) + int(req.request_count)

        result = ScoreResult()
        for tier, count in totals.items():
            weight = self.weight_for(tier)
            result.weighted_score += count * weight
            result.total_requests += count
            result.tier_breakdown[tier] = {"requests": count, "weight": weight}
        return result
