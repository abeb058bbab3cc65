from __future__ import annotations

import logging
import time
from pathlib import Path

from ..models.config_models import InferenceConfig
from ..models.filter_spec import GroupDimension
from ..models.ingest_result import IngestResult
from ..models.role_map import RoleMap
from ..text.reader import parse_table, read_text_file
from .expander import expand_rows
from .inference import infer_roles

"""Ingestion orchestration: text buffer -> IngestResult.

Runs tokenizer, schema inference and row expansion in one pass. Three
conditions are reported to the caller as exceptions; every other data defect
(bad numbers, missing role columns, duplicate headers) is absorbed by
defaulting.
"""

__all__ = [
    "IngestionError",
    "UnreadableInputError",
    "EmptyTableError",
    "InsufficientSchemaError",
    "ingest_text",
    "ingest_file",
    "default_group",
]

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Base exception for ingestion failures reported to the user."""

    error_type = "INGESTION_ERROR"


class UnreadableInputError(IngestionError):
    """The source text could not be obtained."""

    error_type = "UNREADABLE_INPUT"


class EmptyTableError(IngestionError):
    """No data rows were found."""

    error_type = "NO_DATA_ROWS"

    def __init__(self, message: str = "no data rows found") -> None:
        super().__init__(message)


class InsufficientSchemaError(IngestionError):
    """Neither a metric column nor product columns could be inferred."""

    error_type = "MISSING_REQUIRED_COLUMNS"

    def __init__(self, message: str = "missing required columns: need at least one numeric column") -> None:
        super().__init__(message)


def default_group(schema: RoleMap) -> GroupDimension:
    """Initial chart grouping right after a file is loaded."""
    if schema.branch_key:
        return GroupDimension.BRANCH
    if schema.area_key:
        return GroupDimension.AREA
    return GroupDimension.PRODUCT


def ingest_text(text: str, config: InferenceConfig | None = None, source: str = "<text>") -> IngestResult:
    """Parse, infer and expand one text buffer.

    Raises:
        EmptyTableError: the buffer has no data rows
        InsufficientSchemaError: no metric key and no product columns
    """
    start = time.perf_counter()
    table = parse_table(text)
    if not table.rows:
        raise EmptyTableError()

    schema = infer_roles(table.headers, table.raw_headers, table.rows, config)
    if not schema.is_sufficient:
        raise InsufficientSchemaError()

    records = expand_rows(table.rows, schema)
    elapsed = time.perf_counter() - start
    logger.info(
        f"{source}: {len(table.rows)} rows -> {len(records)} records "
        f"({'wide' if schema.is_wide else 'long'} format)"
    )
    return IngestResult(
        source=source,
        table=table,
        schema=schema,
        records=records,
        elapsed_seconds=elapsed,
    )


def ingest_file(path: Path, config: InferenceConfig | None = None) -> IngestResult:
    """Read a whole file and ingest it; I/O failures become UnreadableInputError."""
    try:
        text = read_text_file(path)
    except OSError as e:
        raise UnreadableInputError(f"unable to read {path}: {e}") from e
    return ingest_text(text, config, source=path.name)
