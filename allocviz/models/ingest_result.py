from __future__ import annotations

from dataclasses import dataclass

from .parsed_table import ParsedTable
from .record import NormalizedRecord
from .role_map import RoleMap

"""IngestResult model: the successful outcome of one ingestion attempt."""

__all__ = [
    "IngestResult",
]


@dataclass(frozen=True)
class IngestResult:
    """Parsed table, inferred schema and expanded records for one source.

    Only produced when the table has data rows and the schema is sufficient;
    the other outcomes are raised as ingestion errors.
    """
    source: str  # file name or "<text>"
    table: ParsedTable
    schema: RoleMap
    records: list[NormalizedRecord]
    elapsed_seconds: float = 0.0

    @property
    def source_rows(self) -> int:
        return len(self.table.rows)
