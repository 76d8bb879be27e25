"""
Configuration — loads settings from environment / .env file.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

log = logging.getLogger(__name__)

# Paths
PROJECT_ROOT = Path(__file__).parent
SEED_PATH = Path(os.getenv("SEED_PATH", str(PROJECT_ROOT / "data" / "seed_from_sheet.json")))
FRONTEND_DIST = Path(os.getenv("FRONTEND_DIST", str(PROJECT_ROOT / "frontend" / "dist")))

# Server
PORT = int(os.getenv("PORT", "4000"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()] or ["*"]

# Postgres (legacy store)
DATABASE_URL = os.getenv("DATABASE_URL", "postgresql://localhost:5432/feature_scoring")

# OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")

DEFAULT_COMPETITORS = ["BambooHR", "Workday", "HiBOB", "SAP SuccessFactors", "ADP"]
COMPETITORS = [
    c.strip()
    for c in os.getenv("COMPETITORS", ", ".join(DEFAULT_COMPETITORS)).split(",")
    if c.strip()
] or list(DEFAULT_COMPETITORS)

# Google Docs export
GOOGLE_CLIENT_ID = os.getenv("GOOGLE_CLIENT_ID", "")

# Google Sheet (the sheet is the database)
GOOGLE_SHEET_ID = os.getenv("GOOGLE_SHEET_ID", "1y5PNfslFtC8sanhWKTnapd6SqbddF2qzckBA_rDnTdc")
GOOGLE_SHEET_GID = os.getenv("GOOGLE_SHEET_GID", "1660060315")
SHEET_FETCH_TIMEOUT = float(os.getenv("SHEET_FETCH_TIMEOUT", "15"))

# Scoring
DEFAULT_TIER_WEIGHTS = {"enterprise": 3, "professional": 2, "starter": 1}


def parse_tier_weights(raw: str | None) -> dict[str, float]:
    """Merge a JSON object of tier weights over the defaults.

    Invalid JSON, a non-object, or non-numeric values are ignored with a warning.
    """
    weights: dict[str, float] = dict(DEFAULT_TIER_WEIGHTS)
    if not raw or not raw.strip():
        return weights
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        log.warning("SCORE_TIER_WEIGHTS is not valid JSON (%s); using defaults", e)
        return weights
    if not isinstance(data, dict):
        log.warning("SCORE_TIER_WEIGHTS must be a JSON object; using defaults")
        return weights
    for tier, weight in data.items():
        if isinstance(weight, bool) or not isinstance(weight, (int, float)):
            log.warning("Ignoring non-numeric weight for tier %r: %r", tier, weight)
            continue
        weights["_".join(str(tier).lower().split())] = weight
    return weights


TIER_WEIGHTS = parse_tier_weights(os.getenv("SCORE_TIER_WEIGHTS"))


def sheet_export_url(sheet_id: str, gid: str) -> str:
    return f"https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid={gid}"


@dataclass(frozen=True)
class Settings:
    """Snapshot of configuration handed to components at construction."""
    sheet_id: str = GOOGLE_SHEET_ID
    sheet_gid: str = GOOGLE_SHEET_GID
    sheet_timeout: float = SHEET_FETCH_TIMEOUT
    seed_path: Path = SEED_PATH
    tier_weights: dict = field(default_factory=lambda: dict(TIER_WEIGHTS))
    competitors: list = field(default_factory=lambda: list(COMPETITORS))

    @property
    def sheet_export_url(self) -> str:
        return sheet_export_url(self.sheet_id, self.sheet_gid)


def get_settings() -> Settings:
    return Settings()
