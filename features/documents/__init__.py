"""
Documents feature — HTML use-case reports and Google Docs export.
"""

from features.documents.google_docs import (
    create_competitor_analysis_doc,
    create_customer_insights_doc,
    customer_insights_content,
)
from features.documents.use_case_html import build_use_case_document_html

__all__ = [
    "build_use_case_document_html",
    "create_competitor_analysis_doc",
    "create_customer_insights_doc",
    "customer_insights_content",
]
