"""
Seed the Postgres legacy store from the bundled seed (or the live sheet).

Each requesting client becomes one professional request; features that
already have requests are left alone. Scores are then recalculated with the
configured tier weights.

Usage:
    python seed_store.py
    python seed_store.py --from-sheet
"""

from __future__ import annotations

import argparse
import logging

import config
from features.scoring import ClientRequest, ClientTier, ScoreCalculator
from features.scoring import db as score_db
from features.sheet_sync import NormalizedRow, SheetFetcher

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger(__name__)


def seed_rows(rows: list[NormalizedRow], calculator: ScoreCalculator) -> dict:
    """Import rows into the store. Returns {"added": n, "skipped": m}."""
    added = 0
    skipped = 0
    for row in rows:
        if not row.name or not row.module:
            skipped += 1
            continue
        feature_id = score_db.upsert_feature(row.module, row.name, row.description, row.point_of_contact)
        if score_db.has_client_requests(feature_id):
            skipped += 1
            continue
        for client in row.requested_clients:
            client = client.strip()
            if client:
                score_db.add_client_request(
                    ClientRequest(feature_id=feature_id, client_tier=ClientTier.PROFESSIONAL.value,
                                  request_count=1, client_name=client),
                    source="sheet",
                )
        score_db.recalculate_score(feature_id, calculator)
        added += 1
    return {"added": added, "skipped": skipped}


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--from-sheet", action="store_true",
                        help="Read the live sheet (falls back to the seed on failure)")
    args = parser.parse_args(argv)

    settings = config.get_settings()
    fetcher = SheetFetcher(settings.sheet_export_url, settings.seed_path, timeout=settings.sheet_timeout)
    rows = fetcher.fetch_rows() if args.from_sheet else fetcher.load_fallback_seed()

    score_db.init_db()
    result = seed_rows(rows, ScoreCalculator(settings.tier_weights))
    log.info(
        "Seed complete: %d features with requested clients added, %d skipped (already present)",
        result["added"], result["skipped"],
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
