"""
Feature Catalog — read operations over one freshly assembled feature list.

A catalog loads the sheet once per instance; build a new one per request so
every read reflects the current sheet.
"""

from __future__ import annotations

import logging

from features.scoring.models import ClientRequest
from features.sheet_sync.assembler import rows_to_feature_list, sheet_requests
from features.sheet_sync.fetcher import SheetFetcher
from features.sheet_sync.models import FeatureRecord

log = logging.getLogger(__name__)

SORT_KEYS = ("score", "name", "module")


class FeatureNotFound(Exception):
    def __init__(self, feature_id: int):
        super().__init__(f"Feature not found: {feature_id}")
        self.feature_id = feature_id


def sort_features(features: list[FeatureRecord], sort: str = "score") -> list[FeatureRecord]:
    """Sort by score (descending), name, or module then name. Ties keep sheet order."""
    if sort == "name":
        return sorted(features, key=lambda f: (f.name or "").casefold())
    if sort == "module":
        return sorted(features, key=lambda f: ((f.module or "").casefold(), (f.name or "").casefold()))
    return sorted(features, key=lambda f: f.weighted_score or 0, reverse=True)


class FeatureCatalog:
    def __init__(self, fetcher: SheetFetcher):
        self.fetcher = fetcher
        self._features: list[FeatureRecord] | None = None

    @property
    def features(self) -> list[FeatureRecord]:
        if self._features is None:
            self._features = rows_to_feature_list(self.fetcher.fetch_rows())
        return self._features

    def list_features(self, sort: str = "score", module: str | None = None) -> list[FeatureRecord]:
        features = self.features
        if module:
            features = [f for f in features if f.module == module]
        return sort_features(features, sort)

    def modules(self) -> list[str]:
        return sorted({f.module for f in self.features if f.module})

    def get(self, feature_id: int) -> FeatureRecord:
        for feature in self.features:
            if feature.id == feature_id:
                return feature
        raise FeatureNotFound(feature_id)

    def requests_for(self, feature_id: int) -> list[ClientRequest]:
        feature = self.get(feature_id)
        clients = [c.strip() for c in (feature.requested_clients or "").split(",") if c.strip()]
        return sheet_requests(feature_id, clients)
