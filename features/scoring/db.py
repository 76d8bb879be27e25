"""
Postgres legacy store for features, client requests and persisted scores.

Tables:
  features         — one row per (module, name)
  client_requests  — one row per request, FK to features
  scores           — one row per feature, rewritten by every recalculation

The sheet is the source of truth; this store is only filled by seed_store.py
and is never read by the API.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Any

import psycopg2
import psycopg2.extras

import config
from features.scoring.calculator import ScoreCalculator
from features.scoring.models import ClientRequest, ScoreResult

log = logging.getLogger(__name__)

# ── Connection ────────────────────────────────────────────────────────

_pool: list[Any] = []


def _get_conn():
    """Get a Postgres connection (simple single-connection reuse)."""
    if _pool:
        conn = _pool[0]
        if not conn.closed:
            return conn
        _pool.clear()

    conn = psycopg2.connect(config.DATABASE_URL)
    conn.autocommit = True
    _pool.append(conn)
    return conn


@contextmanager
def get_cursor():
    """Yield a dict cursor."""
    conn = _get_conn()
    cur = conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor)
    try:
        yield cur
    finally:
        cur.close()


# ── Schema ────────────────────────────────────────────────────────────

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS features (
    id                SERIAL PRIMARY KEY,
    module            TEXT NOT NULL,
    name              TEXT NOT NULL,
    description       TEXT,
    point_of_contact  TEXT,
    created_at        TIMESTAMPTZ DEFAULT now(),
    updated_at        TIMESTAMPTZ DEFAULT now(),
    UNIQUE (module, name)
);

CREATE TABLE IF NOT EXISTS client_requests (
    id              SERIAL PRIMARY KEY,
    feature_id      INTEGER NOT NULL REFERENCES features(id) ON DELETE CASCADE,
    client_tier     TEXT NOT NULL,
    request_count   INTEGER NOT NULL DEFAULT 1 CHECK (request_count >= 1),
    client_name     TEXT,
    source          TEXT,
    created_at      TIMESTAMPTZ DEFAULT now(),
    updated_at      TIMESTAMPTZ DEFAULT now()
);

CREATE TABLE IF NOT EXISTS scores (
    id              SERIAL PRIMARY KEY,
    feature_id      INTEGER NOT NULL UNIQUE REFERENCES features(id) ON DELETE CASCADE,
    weighted_score  DOUBLE PRECISION NOT NULL,
    total_requests  INTEGER NOT NULL DEFAULT 0,
    tier_breakdown  JSONB DEFAULT '{}'::jsonb,
    calculated_at   TIMESTAMPTZ DEFAULT now()
);

CREATE INDEX IF NOT EXISTS idx_client_requests_feature ON client_requests(feature_id);
CREATE INDEX IF NOT EXISTS idx_scores_feature ON scores(feature_id);
"""


def init_db():
    """Create tables if they don't exist."""
    try:
        with get_cursor() as cur:
            cur.execute(SCHEMA_SQL)
        log.info("Database schema initialized")
    except Exception as e:
        log.error("Failed to initialize database: %s", e)
        raise


# ── Features ──────────────────────────────────────────────────────────

def upsert_feature(module: str, name: str, description: str | None = None,
                   point_of_contact: str | None = None) -> int:
    """Insert a feature if (module, name) is new; return its id either way."""
    with get_cursor() as cur:
        cur.execute("""
            INSERT INTO features (module, name, description, point_of_contact)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (module, name) DO NOTHING
        """, (module, name, description or None, point_of_contact or None))
        cur.execute("SELECT id FROM features WHERE module = %s AND name = %s", (module, name))
        return cur.fetchone()["id"]


def list_feature_ids() -> list[int]:
    with get_cursor() as cur:
        cur.execute("SELECT id FROM features ORDER BY id")
        return [row["id"] for row in cur.fetchall()]


def list_scored_features() -> list[dict]:
    """Features joined with their persisted score, highest score first."""
    with get_cursor() as cur:
        cur.execute("""
            SELECT f.id, f.module, f.name, f.description, f.point_of_contact,
                   coalesce(s.weighted_score, 0) AS weighted_score,
                   coalesce(s.total_requests, 0) AS total_requests,
                   s.tier_breakdown,
                   (SELECT string_agg(cr.client_name, ', ' ORDER BY cr.id)
                      FROM client_requests cr WHERE cr.feature_id = f.id) AS requested_clients
            FROM features f
            LEFT JOIN scores s ON s.feature_id = f.id
            ORDER BY weighted_score DESC, f.id ASC
        """)
        return [dict(row) for row in cur.fetchall()]


# ── Client requests ───────────────────────────────────────────────────

def add_client_request(req: ClientRequest, source: str | None = None) -> None:
    with get_cursor() as cur:
        cur.execute("""
            INSERT INTO client_requests (feature_id, client_tier, request_count, client_name, source)
            VALUES (%s, %s, %s, %s, %s)
        """, (req.feature_id, req.client_tier, req.request_count, req.client_name, source))


def get_client_requests(feature_id: int) -> list[ClientRequest]:
    with get_cursor() as cur:
        cur.execute("""
            SELECT feature_id, client_tier, request_count, client_name
            FROM client_requests WHERE feature_id = %s ORDER BY id
        """, (feature_id,))
        return [ClientRequest(**row) for row in cur.fetchall()]


def has_client_requests(feature_id: int) -> bool:
    with get_cursor() as cur:
        cur.execute("SELECT 1 FROM client_requests WHERE feature_id = %s LIMIT 1", (feature_id,))
        return cur.fetchone() is not None


# ── Scores ────────────────────────────────────────────────────────────

def upsert_score(feature_id: int, score: ScoreResult) -> None:
    with get_cursor() as cur:
        cur.execute("""
            INSERT INTO scores (feature_id, weighted_score, total_requests, tier_breakdown, calculated_at)
            VALUES (%(feature_id)s, %(weighted_score)s, %(total_requests)s, %(tier_breakdown)s, now())
            ON CONFLICT (feature_id) DO UPDATE SET
                weighted_score = EXCLUDED.weighted_score,
                total_requests = EXCLUDED.total_requests,
                tier_breakdown = EXCLUDED.tier_breakdown,
                calculated_at = EXCLUDED.calculated_at
        """, {
            "feature_id": feature_id,
            "weighted_score": score.weighted_score,
            "total_requests": score.total_requests,
            "tier_breakdown": json.dumps(score.tier_breakdown),
        })


def recalculate_score(feature_id: int, calculator: ScoreCalculator) -> ScoreResult:
    """Recompute a feature's score from its stored requests and persist it."""
    score = calculator.compute(get_client_requests(feature_id))
    upsert_score(feature_id, score)
    return score


def recalculate_all_scores(calculator: ScoreCalculator) -> int:
    feature_ids = list_feature_ids()
    for feature_id in feature_ids:
        recalculate_score(feature_id, calculator)
    log.info("Recalculated scores for %d features", len(feature_ids))
    return len(feature_ids)
