"""
Data models for the scoring feature.

ClientRequest is the unit of demand; ScoreResult is always derived from a set
of them and never stored as independent truth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ClientTier(str, Enum):
    ENTERPRISE = "enterprise"
    PROFESSIONAL = "professional"
    STARTER = "starter"
    OTHER = "other"


@dataclass
class ClientRequest:
    """A request for a feature from one client (or a batch of identical ones)."""
    feature_id: int | None
    client_tier: str = ClientTier.PROFESSIONAL.value
    request_count: int = 1
    client_name: str | None = None

    def __post_init__(self):
        if isinstance(self.client_tier, ClientTier):
            self.client_tier = self.client_tier.value
        if self.request_count < 1:
            raise ValueError(f"request_count must be >= 1, got {self.request_count}")

    def to_dict(self) -> dict:
        return {
            "client_name": self.client_name,
            "client_tier": self.client_tier,
            "request_count": self.request_count,
        }


@dataclass
class ScoreResult:
    weighted_score: float = 0
    total_requests: int = 0
    tier_breakdown: dict = field(default_factory=dict)  # {tier: {"requests": n, "weight": w}}
