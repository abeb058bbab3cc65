from __future__ import annotations

from dataclasses import dataclass, field

"""ParsedTable model: tokenizer output.

A ParsedTable holds the sanitized header names, the original header text used
by the schema inferencer, and the data rows keyed by sanitized header.
"""

__all__ = [
    "ParsedTable",
]


@dataclass(frozen=True)
class ParsedTable:
    """Rows of string cells after delimiter and header-row detection.

    Every row dict has exactly the keys of ``headers`` in the same order;
    missing trailing cells are stored as empty strings.
    """
    headers: list[str] = field(default_factory=list)  # unique, non-empty
    raw_headers: list[str] = field(default_factory=list)  # pre-sanitization text
    rows: list[dict[str, str]] = field(default_factory=list)
    delimiter: str = ","
    header_index: int = 0  # index among non-blank lines

    @property
    def is_empty(self) -> bool:
        return not self.headers and not self.rows
