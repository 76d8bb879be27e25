"""
Row Normalizer — maps sheet records onto canonical feature fields.

Columns are found by header name only (case-insensitive, first matching alias
wins). There is no positional fallback: an unrecognized layout yields a
missing field rather than data from the wrong column.
"""

from __future__ import annotations

import logging
import re

from features.sheet_sync.models import NormalizedRow

log = logging.getLogger(__name__)

NAME_ALIASES = ["Feature", "Feature Name", "feature"]
DESCRIPTION_ALIASES = ["Feature Description", "Feature description"]
MODULE_ALIASES = ["Module", "module", "Module Name", "Product Module"]
POC_ALIASES = ["Point of Contact", "Point of contact", "POC"]
CLIENTS_ALIASES = ["Requested Clients", "Requested clients", "Requested Client(s)"]

_CLIENT_SEPARATORS = re.compile(r"[\n,;]+")


def _norm(s: object) -> str:
    return str(s if s is not None else "").strip().lower()


def get_column(row: dict, aliases: list[str]) -> str:
    """Return the trimmed value of the first alias present in row, or ''."""
    for alias in aliases:
        want = _norm(alias)
        for key, value in row.items():
            if _norm(key) == want:
                return str(value).strip() if value is not None else ""
    return ""


def split_requested_clients(raw: str | None) -> list[str]:
    """'Acme, Globex; Initech' -> ['Acme', 'Globex', 'Initech']."""
    if not raw:
        return []
    return [piece.strip() for piece in _CLIENT_SEPARATORS.split(raw) if piece.strip()]


def normalize_row(row: dict) -> NormalizedRow | None:
    """Build a NormalizedRow, or None when name or module is blank."""
    name = get_column(row, NAME_ALIASES)
    module = get_column(row, MODULE_ALIASES)
    if not name or not module:
        return None
    return NormalizedRow(
        name=name,
        module=module,
        description=get_column(row, DESCRIPTION_ALIASES),
        point_of_contact=get_column(row, POC_ALIASES),
        requested_clients=split_requested_clients(get_column(row, CLIENTS_ALIASES)),
    )


def normalize_rows(records: list[dict]) -> list[NormalizedRow]:
    out = []
    for record in records:
        normalized = normalize_row(record)
        if normalized is None:
            log.debug("Dropping sheet row without feature name or module: %s", record)
            continue
        out.append(normalized)
    return out
