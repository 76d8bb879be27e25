"""
Sheet sync feature — the Google Sheet as the feature database.

Stages are separate so each can be exercised on its own:
    fetch (fetcher) -> parse (csv_parser) -> normalize (normalizer) -> assemble (assembler)

Public API:
    from features.sheet_sync import FeatureCatalog, SheetFetcher, FeatureRecord
"""

from features.sheet_sync.assembler import rows_to_feature_list
from features.sheet_sync.catalog import FeatureCatalog, FeatureNotFound, sort_features
from features.sheet_sync.fetcher import SheetFetcher, SheetFetchError, SourceUnavailable
from features.sheet_sync.models import FeatureRecord, NormalizedRow

__all__ = [
    "FeatureCatalog",
    "FeatureNotFound",
    "FeatureRecord",
    "NormalizedRow",
    "SheetFetchError",
    "SheetFetcher",
    "SourceUnavailable",
    "rows_to_feature_list",
    "sort_features",
]
