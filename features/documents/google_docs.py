"""
Google Docs export. Without GOOGLE_CLIENT_ID only a preview is returned.
"""

from __future__ import annotations

import logging

import config
from features.sheet_sync.models import FeatureRecord
from models.schemas import CompetitorAnalysis

log = logging.getLogger(__name__)


def _not_configured(preview: dict) -> dict:
    return {"ok": True, "stub": True, "message": "Google API not configured", "preview": preview}


def _not_implemented(kind: str) -> dict:
    return {
        "ok": False,
        "doc_id": None,
        "doc_url": None,
        "message": f"Google Docs {kind} export is not implemented yet",
    }


def customer_insights_content(feature: FeatureRecord) -> str:
    return (
        f"Feature: {feature.name}\n"
        f"Module: {feature.module}\n"
        f"Requests: {feature.total_requests or 0}\n\n"
        "(Data from Google Sheet.)"
    )


def create_customer_insights_doc(feature: FeatureRecord, insights: str) -> dict:
    if not config.GOOGLE_CLIENT_ID:
        return _not_configured({"feature": feature.name, "insights": insights[:200]})
    # TODO: copy the insights template through the Drive API and fill it with documents.batchUpdate
    log.warning("Google Docs export requested for %r but is not implemented", feature.name)
    return _not_implemented("customer insights")


def create_competitor_analysis_doc(feature: FeatureRecord, analysis: CompetitorAnalysis) -> dict:
    if not config.GOOGLE_CLIENT_ID:
        return _not_configured({"feature": feature.name, "competitors": len(analysis.competitors)})
    log.warning("Google Docs competitor export requested for %r but is not implemented", feature.name)
    return _not_implemented("competitor analysis")
