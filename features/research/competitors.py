"""
Competitor research — maps a feature to competitor terminology and compares
how competitors implement it.

Replies are structured JSON; anything missing or malformed is repaired with
defaults so the document builder always gets a complete shape. Without an
OpenAI key, deterministic stub replies are returned instead.
"""

from __future__ import annotations

import logging
from typing import Any

import config
from models.schemas import CompetitorAnalysis, CompetitorEntry
from utils.llm import chat_json, is_configured

log = logging.getLogger(__name__)

MAPPING_SYSTEM = (
    "You are an HR software expert. For the given product feature, give the exact "
    "or closest feature name/term used by each competitor. Reply with a short phrase "
    "per competitor, nothing else.\n"
    "Reply in JSON only, one key per competitor, e.g. "
    '{"BambooHR": "Time Off Restrictions", "Workday": "Leave Blackout Dates"}'
)

ANALYSIS_SYSTEM = (
    "You are an HR software analyst comparing products. You MUST respond with valid JSON "
    "in this exact format:\n"
    '{"similarities": ["..."], "differences": ["..."], "competitors": [\n'
    '  {"name": "BambooHR", "term": "...", "how_it_works": "...",\n'
    '   "help_article_title": "Doc page title", "help_article_url": "https://... or \\"\\"",\n'
    '   "help_search_query": "BambooHR [feature] documentation"}\n'
    "]}\n\n"
    "1. Write 1-2 factual, concise sentences per competitor on how that product implements "
    "the capability.\n"
    "2. For EACH competitor give help_article_title and help_search_query; never leave them "
    "empty. Set help_article_url only if you know the exact official https help URL, "
    'otherwise use "".\n'
    "3. similarities: 2-5 short points on how our product and the competitors are similar.\n"
    "4. differences: 2-5 short points on how they differ (scope, configuration, terminology, "
    "limitations)."
)


def _as_list(value: Any) -> list:
    if isinstance(value, list):
        return value
    if isinstance(value, str):
        return [value]
    return []


def _clean_strings(value: Any) -> list[str]:
    return [str(item).strip() for item in _as_list(value) if item is not None and str(item).strip()]


def _text(value: Any) -> str:
    return str(value).strip() if value is not None else ""


def repair_competitor_entry(data: dict) -> CompetitorEntry:
    """Fill missing link fields with a title and a search-query fallback."""
    name = _text(data.get("name"))
    term = _text(data.get("term"))
    url = _text(data.get("help_article_url"))
    return CompetitorEntry(
        name=name,
        term=term,
        how_it_works=_text(data.get("how_it_works")),
        help_article_title=_text(data.get("help_article_title")) or "Search docs",
        help_article_url=url if url.startswith("http") else None,
        help_search_query=(_text(data.get("help_search_query"))
                           or f"{name} {term} documentation".strip()),
    )


def repair_competitor_analysis(data: dict, feature_name: str,
                               feature_description: str = "") -> CompetitorAnalysis:
    """Coerce a raw analysis reply into a complete CompetitorAnalysis."""
    competitors = [
        repair_competitor_entry(c) for c in _as_list(data.get("competitors")) if isinstance(c, dict)
    ]
    similarities = data.get("similarities", data.get("Similarities"))
    differences = data.get("differences", data.get("Differences"))
    return CompetitorAnalysis(
        feature_name=feature_name,
        feature_description=feature_description,
        competitors=competitors,
        similarities=_clean_strings(similarities),
        differences=_clean_strings(differences),
        ok=bool(data.get("ok", True)),
        stub=bool(data.get("stub", False)),
    )


def map_to_competitor_terms(feature_name: str, feature_description: str = "",
                            competitors: list[str] | None = None) -> dict:
    """Map a feature to each competitor's name for it.

    Returns {"ok": bool, "competitors": {competitor: term}} ("stub": True when
    no OpenAI key is configured).
    """
    competitors = competitors or config.COMPETITORS
    if not is_configured():
        return {
            "ok": False,
            "stub": True,
            "competitors": {c: f'{c} equivalent of "{feature_name}"' for c in competitors},
        }

    result = chat_json(
        system=MAPPING_SYSTEM,
        user=(
            f"Feature: {feature_name}\n"
            f"Description: {feature_description}\n\n"
            f"Competitors: {', '.join(competitors)}"
        ),
        max_tokens=512,
    )
    if "error" in result and "raw" in result:
        return {"ok": True, "competitors": {"raw": result["raw"]}}
    return {"ok": True, "competitors": {str(k): _text(v) for k, v in result.items()}}


def generate_competitor_analysis(feature_name: str, feature_description: str = "",
                                 competitors: list[str] | None = None) -> CompetitorAnalysis:
    mapping = map_to_competitor_terms(feature_name, feature_description, competitors)
    terms: dict = mapping.get("competitors") or {}

    if mapping.get("stub"):
        return CompetitorAnalysis(
            feature_name=feature_name,
            feature_description=feature_description,
            competitors=[
                CompetitorEntry(
                    name=name,
                    term=term,
                    how_it_works=("Configured under their Time Off / Leave settings. "
                                  "(Stub: add OPENAI_API_KEY for real analysis.)"),
                    help_search_query=f"{name} {term} help",
                )
                for name, term in terms.items()
            ],
            stub=True,
        )

    log.info("Generating competitor analysis for %r across %d competitors", feature_name, len(terms))
    result = chat_json(
        system=ANALYSIS_SYSTEM,
        user=(
            f'Feature: "{feature_name}" ({feature_description})\n\n'
            "Competitor terms:\n"
            + "\n".join(f"{name}: {term}" for name, term in terms.items())
        ),
        max_tokens=2048,
    )
    if "error" in result:
        log.warning("Competitor analysis reply unusable, returning empty analysis")
    return repair_competitor_analysis(result, feature_name, feature_description)
