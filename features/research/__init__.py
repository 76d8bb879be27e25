"""
Research feature — AI-assisted competitor research and use-case writing.

Public API:
    from features.research import map_to_competitor_terms, generate_competitor_analysis
    from features.research import generate_use_case_sections
"""

from features.research.competitors import (
    generate_competitor_analysis,
    map_to_competitor_terms,
    repair_competitor_analysis,
)
from features.research.use_case import generate_use_case_sections

__all__ = [
    "generate_competitor_analysis",
    "generate_use_case_sections",
    "map_to_competitor_terms",
    "repair_competitor_analysis",
]
