"""
Data models for the sheet sync feature.

NormalizedRow is one usable sheet row (or one seed entry); FeatureRecord is
what the API serves, with scores derived from the requested clients.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class NormalizedRow:
    name: str
    module: str
    description: str = ""
    point_of_contact: str = ""
    requested_clients: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "NormalizedRow":
        clients = data.get("requested_clients") or []
        if isinstance(clients, str):
            clients = [clients]
        return cls(
            name=str(data.get("name") or ""),
            module=str(data.get("module") or ""),
            description=str(data.get("description") or ""),
            point_of_contact=str(data.get("point_of_contact") or ""),
            requested_clients=[str(c) for c in clients],
        )


@dataclass
class FeatureRecord:
    id: int
    module: str
    name: str
    description: str | None = None
    point_of_contact: str | None = None
    weighted_score: float = 0
    total_requests: int = 0
    tier_breakdown: dict | None = None
    requested_clients: str | None = None  # comma-joined

    def to_dict(self) -> dict:
        return asdict(self)
