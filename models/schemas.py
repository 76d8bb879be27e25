"""
Shapes of the AI research replies after repair.

Feature and score models live with their features:
features.sheet_sync.models and features.scoring.models.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field


@dataclass
class CompetitorEntry:
    """How one competitor names and implements a feature."""
    name: str
    term: str = ""
    how_it_works: str = ""
    help_article_title: str = "Search docs"
    help_article_url: str | None = None  # https only, else None
    help_search_query: str = ""


@dataclass
class CompetitorAnalysis:
    feature_name: str
    feature_description: str = ""
    competitors: list[CompetitorEntry] = field(default_factory=list)
    similarities: list[str] = field(default_factory=list)
    differences: list[str] = field(default_factory=list)
    ok: bool = True
    stub: bool = False

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class UseCaseSections:
    objective: str
    actors: str
    preconditions: str
    basic_flow: list[str] = field(default_factory=list)
    postconditions: str = ""
    acceptance_criteria: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)
