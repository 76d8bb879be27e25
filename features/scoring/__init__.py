"""
Scoring feature — weighted priority scores from per-tier client requests.

Public API:
    from features.scoring import ScoreCalculator, ClientRequest, ClientTier, ScoreResult
    from features.scoring import db as score_db
"""

from features.scoring.calculator import ScoreCalculator, normalize_tier
from features.scoring.models import ClientRequest, ClientTier, ScoreResult

__all__ = ["ClientRequest", "ClientTier", "ScoreCalculator", "ScoreResult", "normalize_tier"]
