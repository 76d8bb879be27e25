"""
Sheet Fetcher — reads the published Google Sheet CSV export.

The sheet is the database: every call re-fetches, with no retries and no
caching. Any failure (transport, non-2xx, HTML instead of CSV, no usable
rows) falls back to the bundled seed list.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import requests

from features.sheet_sync.csv_parser import parse_csv
from features.sheet_sync.models import NormalizedRow
from features.sheet_sync.normalizer import normalize_rows

log = logging.getLogger(__name__)

BOM = "\ufeff"


class SheetFetchError(Exception):
    """The sheet could not be read as CSV."""


class SourceUnavailable(Exception):
    """Neither the sheet nor the fallback seed produced any features."""


class SheetFetcher:
    def __init__(
        self,
        export_url: str,
        seed_path: Path | str,
        timeout: float = 15.0,
        session: requests.Session | None = None,
    ):
        self.export_url = export_url
        self.seed_path = Path(seed_path)
        self.timeout = timeout
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self):
        """Close the HTTP session if this fetcher created it."""
        if self._owns_session:
            self.session.close()

    def fetch_csv_text(self) -> str:
        """Download the export and return its text. Raises SheetFetchError."""
        try:
            resp = self.session.get(
                self.export_url,
                headers={"Accept": "text/csv"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SheetFetchError(f"Request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise SheetFetchError(f"HTTP {resp.status_code}")

        text = resp.content.decode("utf-8", errors="replace")
        if text.startswith(BOM):
            text = text[1:]
        if text.lstrip().startswith("<"):
            raise SheetFetchError("Sheet not published (got HTML)")
        return text

    def fetch_sheet_rows(self) -> list[NormalizedRow]:
        """Fetch, parse and normalize the sheet. Raises SheetFetchError."""
        rows = normalize_rows(parse_csv(self.fetch_csv_text()))
        if not rows:
            raise SheetFetchError("Sheet has no rows with a feature name and module")
        log.info("Loaded %d features from sheet", len(rows))
        return rows

    def load_fallback_seed(self) -> list[NormalizedRow]:
        """Read the bundled seed file. Raises SourceUnavailable."""
        try:
            data = json.loads(self.seed_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise SourceUnavailable(f"Fallback seed unreadable: {e}") from e
        if not isinstance(data, list):
            raise SourceUnavailable(f"Fallback seed {self.seed_path} is not a list")
        rows = [NormalizedRow.from_dict(entry) for entry in data if isinstance(entry, dict)]
        if not rows:
            raise SourceUnavailable(f"Fallback seed {self.seed_path} has no features")
        return rows

    def fetch_rows(self) -> list[NormalizedRow]:
        """Current feature rows: the sheet when readable, else the seed."""
        try:
            return self.fetch_sheet_rows()
        except SheetFetchError as e:
            log.warning("Sheet fetch failed, using fallback seed: %s", e)
        rows = self.load_fallback_seed()
        log.info("Loaded %d features from fallback seed %s", len(rows), self.seed_path)
        return rows
