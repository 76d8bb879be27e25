"""
Use-case document — a self-contained HTML report meant for print-to-PDF.

Every interpolated value is HTML-escaped.
"""

from __future__ import annotations

from html import escape
from urllib.parse import quote_plus

from features.research.use_case import stub_use_case
from features.sheet_sync.models import FeatureRecord
from models.schemas import CompetitorAnalysis, CompetitorEntry, UseCaseSections

STYLE = """
    body { font-family: system-ui, sans-serif; max-width: 800px; margin: 2rem auto; padding: 0 1rem; color: #1a1a1a; line-height: 1.5; }
    h1 { font-size: 1.5rem; border-bottom: 2px solid #f97316; padding-bottom: 0.5rem; }
    h2 { font-size: 1.15rem; margin-top: 1.5rem; color: #374151; }
    table { width: 100%; border-collapse: collapse; margin: 0.5rem 0; font-size: 0.9rem; }
    th, td { border: 1px solid #e5e7eb; padding: 0.5rem 0.75rem; text-align: left; }
    th { background: #f3f4f6; font-weight: 600; }
    a { color: #ea580c; text-decoration: none; }
    .meta { color: #6b7280; font-size: 0.9rem; margin: 0.5rem 0; }
    .section { margin-bottom: 1.5rem; }
    ul, ol { margin: 0.5rem 0; padding-left: 1.5rem; }
    @media print { body { margin: 1rem; } }
"""


def _e(value) -> str:
    return escape(str(value)) if value is not None else ""


def _or_dash(value) -> str:
    return _e(value) if value else "—"


def _items(tag: str, values: list[str]) -> str:
    return f"<{tag}>" + "".join(f"<li>{_e(v)}</li>" for v in values) + f"</{tag}>"


def help_link(entry: CompetitorEntry) -> tuple[str, str]:
    """(href, text) for a competitor's help cell; a search URL when there is no article."""
    if entry.help_article_url and entry.help_article_url.startswith("http"):
        href = entry.help_article_url
        default_text = "Help article"
    else:
        query = entry.help_search_query.strip() or f"{entry.name} {entry.term} documentation".strip()
        href = f"https://www.google.com/search?q={quote_plus(query)}"
        default_text = "Search docs"
    return href, (entry.help_article_title or "").strip() or default_text


def _competitor_section(analysis: CompetitorAnalysis | None) -> str:
    if analysis is None:
        return ""
    if not (analysis.competitors or analysis.similarities or analysis.differences):
        return ""

    parts = ['<div class="section">', "<h2>Competitor analysis</h2>"]
    if analysis.similarities:
        parts.append("<p><strong>Similarities</strong> (vs competitors):</p>")
        parts.append(_items("ul", analysis.similarities))
    if analysis.differences:
        parts.append("<p><strong>Differences</strong> (vs competitors):</p>")
        parts.append(_items("ul", analysis.differences))
    if analysis.competitors:
        rows = []
        for c in analysis.competitors:
            href, text = help_link(c)
            rows.append(
                f"<tr><td>{_e(c.name)}</td><td>{_or_dash(c.term)}</td>"
                f"<td>{_or_dash(c.how_it_works)}</td>"
                f'<td><a href="{_e(href)}" target="_blank" rel="noopener">{_e(text)}</a></td></tr>'
            )
        parts.append("<p><strong>Competitor mapping</strong></p>")
        parts.append(
            "<table><thead><tr><th>Competitor</th><th>Term</th><th>How it works</th>"
            "<th>Help / links</th></tr></thead><tbody>" + "".join(rows) + "</tbody></table>"
        )
    parts.append("</div>")
    return "\n".join(parts)


def build_use_case_document_html(
    feature: FeatureRecord,
    competitor_analysis: CompetitorAnalysis | None = None,
    use_case: UseCaseSections | None = None,
) -> str:
    uc = use_case or stub_use_case(feature.name)
    criteria = ""
    if uc.acceptance_criteria:
        criteria = "<p><strong>Acceptance criteria:</strong></p>" + _items("ul", uc.acceptance_criteria)

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Use case: {_e(feature.name)}</title>
  <style>{STYLE}</style>
</head>
<body>
  <h1>Use case: {_e(feature.name)}</h1>
  <div class="meta">Module: {_or_dash(feature.module)} | Point of contact: {_or_dash(feature.point_of_contact)} | Requested clients: {_or_dash(feature.requested_clients)}</div>

  <div class="section">
    <h2>Feature description</h2>
    <p>{_or_dash(feature.description)}</p>
  </div>

  {_competitor_section(competitor_analysis)}

  <div class="section">
    <h2>Use case</h2>
    <p><strong>Objective:</strong> {_e(uc.objective)}</p>
    <p><strong>Actors:</strong> {_e(uc.actors)}</p>
    <p><strong>Preconditions:</strong> {_e(uc.preconditions)}</p>
    <p><strong>Basic flow:</strong></p>
    {_items("ol", uc.basic_flow)}
    <p><strong>Postconditions:</strong> {_e(uc.postconditions)}</p>
    {criteria}
  </div>

  <p style="margin-top:2rem;color:#9ca3af;font-size:0.85rem;">Generated by Feature Scoring. Save as PDF via File → Print → Save as PDF.</p>
</body>
</html>"""
