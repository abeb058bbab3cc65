from __future__ import annotations

import math
import re
from pathlib import Path

from allocviz.models.parsed_table import ParsedTable

"""Delimited text reader.

Turns a raw text buffer into a ParsedTable:
1. Drop blank lines, strip trailing whitespace
2. Choose comma or tab from the first line
3. Split cells (quote-aware for comma)
4. Pick the first "texty" row as header (widest row as fallback)
5. Repair and sanitize header names, key the data rows by them
"""

__all__ = [
    "read_text_file",
    "parse_table",
    "detect_delimiter",
    "split_line",
    "sanitize_headers",
    "is_header_row",
]

_ALPHA = re.compile(r"[A-Za-z]")


def read_text_file(path: Path) -> str:
    """Read a whole text file in one go.

    A leading BOM is dropped; bytes that are not UTF-8 (Latin-1 exports) become
    U+FFFD instead of failing the read.
    """
    return path.read_text(encoding="utf-8-sig", errors="replace")


def _clean_lines(text: str) -> list[str]:
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = (line.rstrip() for line in normalized.split("\n"))
    return [line for line in lines if line.strip() != ""]


def detect_delimiter(lines: list[str]) -> str:
    """Tab when the first non-blank line has strictly more tabs than commas."""
    first = next((line for line in lines if line.strip() != ""), "")
    return "\t" if first.count("\t") > first.count(",") else ","


def split_line(line: str, delimiter: str) -> list[str]:
    if delimiter == "\t":
        return line.split("\t")
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False
    i = 0
    while i < len(line):
        ch = line[i]
        if ch == '"':
            if in_quotes and i + 1 < len(line) and line[i + 1] == '"':
                current.append('"')
                i += 2
                continue
            in_quotes = not in_quotes
        elif ch == delimiter and not in_quotes:
            cells.append("".join(current))
            current = []
        else:
            current.append(ch)
        i += 1
    cells.append("".join(current))
    return cells


def is_header_row(cells: list[str]) -> bool:
    """A row is a header candidate when enough of its cells contain letters."""
    texty = sum(1 for c in cells if _ALPHA.search(c))
    return texty >= max(2, math.ceil(len(cells) * 0.3))


def _find_header(all_cells: list[list[str]]) -> tuple[int, int]:
    """Return (header index, widest row width seen before the header)."""
    header_idx = 0
    max_cols = 0
    for i, cells in enumerate(all_cells):
        if is_header_row(cells):
            return i, len(cells)
        if len(cells) > max_cols:
            max_cols = len(cells)
            header_idx = i
    return header_idx, max_cols


def sanitize_headers(headers: list[str]) -> list[str]:
    """Trim names; fill blanks with col<N>; suffix case-insensitive duplicates."""
    used: set[str] = set()
    result: list[str] = []
    for idx, h in enumerate(headers):
        base = (h or "").strip() or f"col{idx + 1}"
        name = base
        attempt = 1
        while name.lower() in used:
            name = f"{base}_{attempt}"
            attempt += 1
        used.add(name.lower())
        result.append(name)
    return result


def _is_blank(cells: list[str]) -> bool:
    return all(c.strip() == "" for c in cells)


def parse_table(text: str) -> ParsedTable:
    """Parse a delimited text buffer into a ParsedTable.

    Returns an empty table when the text has no non-blank lines.
    """
    lines = _clean_lines(text)
    if not lines:
        return ParsedTable()

    delimiter = detect_delimiter(lines)
    all_cells = [split_line(line, delimiter) for line in lines]
    header_idx, max_cols = _find_header(all_cells)

    header_cells = list(all_cells[header_idx])
    first_data = next((c for c in all_cells[header_idx + 1:] if not _is_blank(c)), [])
    # Area labels often sit in an unlabeled leading column
    if header_cells and "branch" in header_cells[0].lower() and len(first_data) == len(header_cells) + 1:
        header_cells = ["Area", *header_cells]
    if len(header_cells) < max_cols:
        header_cells += [f"col{n}" for n in range(len(header_cells) + 1, max_cols + 1)]

    raw_headers = [c.strip() for c in header_cells]
    headers = sanitize_headers(header_cells)

    rows: list[dict[str, str]] = []
    for cells in all_cells[header_idx + 1:]:
        if _is_blank(cells):
            continue
        padded = cells + [""] * (len(headers) - len(cells))
        rows.append(dict(zip(headers, padded)))

    return ParsedTable(
        headers=headers,
        raw_headers=raw_headers,
        rows=rows,
        delimiter=delimiter,
        header_index=header_idx,
    )
