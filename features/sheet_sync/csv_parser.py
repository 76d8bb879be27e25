"""
Quote-aware CSV parsing for the sheet export.

Newlines inside double-quoted fields do not start a new row, so feature
names and descriptions with line breaks stay in one cell. Malformed quoting
never raises: an unmatched quote keeps the parser in quote mode to the end.
"""

from __future__ import annotations


def parse_csv_rows(text: str) -> list[list[str]]:
    """Split CSV text into rows of trimmed cells."""
    rows: list[list[str]] = []
    row: list[str] = []
    cell: list[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        c = text[i]
        if in_quotes:
            if c == '"':
                if i + 1 < n and text[i + 1] == '"':
                    cell.append('"')
                    i += 1
                else:
                    in_quotes = False
            else:
                cell.append(c)
        elif c == '"':
            in_quotes = True
        elif c == ",":
            row.append("".join(cell).strip())
            cell = []
        elif c in "\r\n":
            if c == "\r" and i + 1 < n and text[i + 1] == "\n":
                i += 1
            row.append("".join(cell).strip())
            rows.append(row)
            row, cell = [], []
        else:
            cell.append(c)
        i += 1

    # A trailing newline closes the last row rather than opening an empty one
    if row or cell or not rows or in_quotes:
        row.append("".join(cell).strip())
        rows.append(row)
    return rows


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text into header-keyed records.

    Returns [] when there is no header plus at least one data row.
    """
    rows = parse_csv_rows(text)
    if len(rows) < 2:
        return []
    headers = [h.strip() for h in rows[0]]
    records = []
    for values in rows[1:]:
        records.append({
            header: (values[j] if j < len(values) else "").strip()
            for j, header in enumerate(headers)
        })
    return records
