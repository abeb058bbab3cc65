from __future__ import annotations

from collections.abc import Sequence

from ..models.record import NormalizedRecord
from ..models.role_map import RoleMap
from ..text.numbers import parse_metric

"""Row expansion: raw rows + inferred roles -> NormalizedRecord list.

Wide tables emit one record per (row, product column); long tables emit one
record per row.
"""

__all__ = [
    "expand_rows",
    "normalize_row",
]


def _text(row: dict[str, str], key: str | None) -> str:
    if not key:
        return ""
    return str(row.get(key) or "").strip()


def normalize_row(row: dict[str, str], roles: RoleMap) -> NormalizedRecord:
    """Long-format record for one source row."""
    if roles.product_key:
        product = _text(row, roles.product_key)
    else:
        product = roles.synthetic_product_label
    metric = parse_metric(row.get(roles.metric_key, "")) if roles.metric_key else 0.0
    return NormalizedRecord(
        product=product,
        item=_text(row, roles.item_key),
        branch=_text(row, roles.branch_key),
        area=_text(row, roles.area_key),
        metric=metric,
    )


def expand_rows(rows: Sequence[dict[str, str]], roles: RoleMap) -> list[NormalizedRecord]:
    if not roles.product_columns:
        return [normalize_row(r, roles) for r in rows]

    expanded: list[NormalizedRecord] = []
    for row in rows:
        area = _text(row, roles.area_key)
        branch = _text(row, roles.branch_key)
        item = _text(row, roles.item_key)
        for col in roles.product_columns:
            expanded.append(
                NormalizedRecord(
                    product=col,
                    item=item,
                    branch=branch,
                    area=area,
                    metric=parse_metric(row.get(col, "")),
                )
            )
    return expanded
