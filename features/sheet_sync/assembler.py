"""
Feature List Assembler — normalized rows + sheet-path scores -> FeatureRecords.

The sheet cannot express tier or count per client, so every requesting client
is one professional request scored with an effective weight of 1: the score is
the number of requesting clients. This deliberately differs from the legacy
store, which scores the same requests with the configured tier weights
(professional = 2 by default). Callers depend on either definition; keep both.
"""

from __future__ import annotations

from features.scoring.calculator import ScoreCalculator
from features.scoring.models import ClientRequest, ClientTier
from features.sheet_sync.models import FeatureRecord, NormalizedRow

SHEET_TIER_WEIGHTS = {ClientTier.PROFESSIONAL.value: 1}

_sheet_calculator = ScoreCalculator(SHEET_TIER_WEIGHTS)


def sheet_requests(feature_id: int | None, clients: list[str]) -> list[ClientRequest]:
    return [
        ClientRequest(feature_id=feature_id, client_tier=ClientTier.PROFESSIONAL.value,
                      request_count=1, client_name=client)
        for client in clients
    ]


def rows_to_feature_list(rows: list[NormalizedRow]) -> list[FeatureRecord]:
    features = []
    for i, row in enumerate(rows):
        feature_id = i + 1
        score = _sheet_calculator.compute(sheet_requests(feature_id, row.requested_clients))
        features.append(FeatureRecord(
            id=feature_id,
            module=row.module,
            name=row.name,
            description=row.description or None,
            point_of_contact=row.point_of_contact or None,
            weighted_score=score.weighted_score,
            total_requests=score.total_requests,
            tier_breakdown=score.tier_breakdown or None,
            requested_clients=", ".join(row.requested_clients) or None,
        ))
    return features
