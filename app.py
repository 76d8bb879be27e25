"""
FastAPI application — REST API for the feature scoring dashboard.

The Google Sheet is the database: every read re-fetches it (falling back to the
bundled seed), and all write endpoints reject with a fixed read-only message.

Endpoints:
  GET  /api/health                              — Health check
  GET  /api/features                            — Feature list (?sort=score|name|module&module=)
  POST /api/features/sync-from-sheet            — Re-read the sheet, report the count
  GET  /api/features/modules                    — Distinct module names
  GET  /api/features/{id}                       — Single feature
  GET  /api/features/{id}/requests              — Requesting clients
  GET  /api/features/{id}/competitor-mapping    — Competitor terms (AI)
  POST /api/features/{id}/competitor-analysis   — Competitor analysis (AI) + doc export
  POST /api/features/{id}/use-case-document     — HTML use-case report (AI)
  POST /api/features/{id}/customer-insights     — Customer insights doc export
"""

from __future__ import annotations

import logging
from typing import Any, Iterator

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from openai import OpenAIError
from pydantic import BaseModel

import config
from features.documents import (
    build_use_case_document_html,
    create_competitor_analysis_doc,
    create_customer_insights_doc,
    customer_insights_content,
)
from features.research import (
    generate_competitor_analysis,
    generate_use_case_sections,
    map_to_competitor_terms,
    repair_competitor_analysis,
)
from features.sheet_sync import FeatureCatalog, FeatureNotFound, SheetFetcher, SourceUnavailable

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger(__name__)

SHEET_UNAVAILABLE_MESSAGE = (
    "Could not load feature list from Google Sheet. "
    "Publish the sheet to web (File > Share > Publish to web)."
)

app = FastAPI(
    title="Feature Scoring",
    description="Feature request prioritization backed by a Google Sheet, with AI competitor research",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_settings() -> config.Settings:
    return config.get_settings()


def get_catalog(settings: config.Settings = Depends(get_settings)) -> Iterator[FeatureCatalog]:
    """A fresh catalog per request: no caching across requests."""
    fetcher = SheetFetcher(
        settings.sheet_export_url,
        settings.seed_path,
        timeout=settings.sheet_timeout,
    )
    try:
        yield FeatureCatalog(fetcher)
    finally:
        fetcher.close()


# ── Error mapping ─────────────────────────────────────────────────────

@app.exception_handler(SourceUnavailable)
async def source_unavailable_handler(request: Request, exc: SourceUnavailable):
    log.error("Feature source unavailable: %s", exc)
    return JSONResponse(status_code=502, content={"detail": SHEET_UNAVAILABLE_MESSAGE})


@app.exception_handler(FeatureNotFound)
async def feature_not_found_handler(request: Request, exc: FeatureNotFound):
    return JSONResponse(status_code=404, content={"detail": "Feature not found"})


@app.exception_handler(OpenAIError)
async def openai_error_handler(request: Request, exc: OpenAIError):
    log.error("AI service request failed: %s", exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "AI service unavailable. Try again later."},
    )


def _read_only(message: str):
    raise HTTPException(status_code=403, detail=message)


# ── Health ────────────────────────────────────────────────────────────

@app.get("/api/health")
def health():
    return {"status": "ok", "service": "feature-scoring"}


# ── Feature list (read) ───────────────────────────────────────────────

@app.get("/api/features")
def list_features(
    sort: str = "score",
    module: str | None = None,
    catalog: FeatureCatalog = Depends(get_catalog),
):
    return [f.to_dict() for f in catalog.list_features(sort=sort, module=module)]


@app.post("/api/features/sync-from-sheet")
def sync_from_sheet(catalog: FeatureCatalog = Depends(get_catalog)):
    return {
        "ok": True,
        "message": "Sheet is the database; data is always read from the sheet.",
        "count": len(catalog.features),
    }


@app.get("/api/features/modules")
def list_modules(catalog: FeatureCatalog = Depends(get_catalog)):
    return catalog.modules()


@app.post("/api/features/recalculate-scores")
def recalculate_scores():
    return {
        "message": "Scores are computed from the sheet (number of requested clients per feature).",
        "recalculated": 0,
    }


@app.get("/api/features/{feature_id}")
def get_feature(feature_id: int, catalog: FeatureCatalog = Depends(get_catalog)):
    return catalog.get(feature_id).to_dict()


@app.get("/api/features/{feature_id}/requests")
def get_feature_requests(feature_id: int, catalog: FeatureCatalog = Depends(get_catalog)):
    return [r.to_dict() for r in catalog.requests_for(feature_id)]


# ── Writes (the sheet is the only writable source) ────────────────────

@app.post("/api/features")
def create_feature():
    _read_only("Feature list is read-only. Edit the Google Sheet to add or change features.")


@app.patch("/api/features/{feature_id}")
def update_feature(feature_id: int):
    _read_only("Feature list is read-only. Edit the Google Sheet to update features.")


@app.delete("/api/features/{feature_id}")
def delete_feature(feature_id: int):
    _read_only("Feature list is read-only. Edit the Google Sheet to remove features.")


@app.post("/api/features/{feature_id}/requests")
def add_feature_request(feature_id: int):
    _read_only("Edit the Google Sheet to add or change requested clients.")


# ── AI research & documents ───────────────────────────────────────────

class UseCaseDocumentRequest(BaseModel):
    competitor_analysis: dict[str, Any] | None = None


@app.post("/api/features/{feature_id}/customer-insights")
def customer_insights(feature_id: int, catalog: FeatureCatalog = Depends(get_catalog)):
    feature = catalog.get(feature_id)
    return create_customer_insights_doc(feature, customer_insights_content(feature))


@app.get("/api/features/{feature_id}/competitor-mapping")
def competitor_mapping(
    feature_id: int,
    catalog: FeatureCatalog = Depends(get_catalog),
    settings: config.Settings = Depends(get_settings),
):
    feature = catalog.get(feature_id)
    return map_to_competitor_terms(feature.name, feature.description or "", settings.competitors)


@app.post("/api/features/{feature_id}/competitor-analysis")
def competitor_analysis(
    feature_id: int,
    catalog: FeatureCatalog = Depends(get_catalog),
    settings: config.Settings = Depends(get_settings),
):
    feature = catalog.get(feature_id)
    analysis = generate_competitor_analysis(feature.name, feature.description or "", settings.competitors)
    doc = create_competitor_analysis_doc(feature, analysis)
    return {"analysis": analysis.to_dict(), "doc": doc}


@app.post("/api/features/{feature_id}/use-case-document")
def use_case_document(
    feature_id: int,
    req: UseCaseDocumentRequest | None = None,
    catalog: FeatureCatalog = Depends(get_catalog),
):
    feature = catalog.get(feature_id)
    analysis = None
    if req and req.competitor_analysis:
        analysis = repair_competitor_analysis(
            req.competitor_analysis, feature.name, feature.description or "",
        )
    sections = generate_use_case_sections(feature.name, feature.description or "")
    return {"html": build_use_case_document_html(feature, analysis, sections)}


# ── Frontend ──────────────────────────────────────────────────────────

if config.FRONTEND_DIST.is_dir():
    app.mount("/", StaticFiles(directory=config.FRONTEND_DIST, html=True), name="frontend")
    log.info("Serving frontend from %s", config.FRONTEND_DIST)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
