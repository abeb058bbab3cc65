from __future__ import annotations

from ..models.ingest_result import IngestResult

"""SUMMARY line rendering and the number formats shared with chart output."""

__all__ = [
    "render_summary_line",
    "format_seconds",
    "format_total",
]


def format_seconds(seconds: float) -> str:
    """Render elapsed seconds without scientific notation or trailing zeros."""
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def format_total(value: float) -> str:
    """Render a metric total without losing digits.

    Examples:
        >>> format_total(1234567.0)
        '1234567'
        >>> format_total(1249.5)
        '1249.5'
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def render_summary_line(result: IngestResult) -> str:
    """Render the SUMMARY line for one ingested source.

    Examples:
        >>> from allocviz.models import IngestResult, ParsedTable, RoleMap
        >>> table = ParsedTable(headers=["Product", "Qty"], raw_headers=["Product", "Qty"],
        ...                     rows=[{"Product": "A", "Qty": "1"}])
        >>> result = IngestResult(source="a.csv", table=table, schema=RoleMap(product_key="Product",
        ...                       metric_key="Qty"), records=[], elapsed_seconds=2.0)
        >>> render_summary_line(result)
        'SUMMARY file=a.csv rows=1 records=0 format=long product_columns=0 synthetic=false elapsed_sec=2'
    """
    schema = result.schema
    return (
        f"SUMMARY file={result.source} "
        f"rows={result.source_rows} "
        f"records={len(result.records)} "
        f"format={'wide' if schema.is_wide else 'long'} "
        f"product_columns={len(schema.product_columns)} "
        f"synthetic={'true' if schema.synthetic_product else 'false'} "
        f"elapsed_sec={format_seconds(result.elapsed_seconds)}"
    )
