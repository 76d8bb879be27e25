"""
Features package — each sub-package encapsulates a self-contained feature.

Convention:
  features/<feature_name>/
    __init__.py      — public API re-exports
    models.py        — data models specific to this feature
    db.py            — database layer (if applicable)
    ...              — any other feature-specific modules

Sub-packages:
  sheet_sync  — fetch, parse, normalize and assemble the sheet into features
  scoring     — weighted scores from client requests; Postgres legacy store
  research    — AI competitor research and use-case writing
  documents   — HTML use-case report and Google Docs export
"""
