from __future__ import annotations

from collections.abc import Iterable, Sequence

import pandas as pd

from ..models.aggregate_result import AggregateResult
from ..models.filter_spec import FilterSpec, GroupDimension
from ..models.record import NormalizedRecord
from ..models.role_map import RoleMap

"""Filtering, grouping and option listing over normalized records.

All functions are pure: the same records and FilterSpec always give the same
output, and nothing is mutated.
"""

__all__ = [
    "UNSPECIFIED",
    "filter_records",
    "aggregate",
    "distinct_values",
]

UNSPECIFIED = "Unspecified"


def _matches(value: str, wanted: str | None) -> bool:
    return wanted is None or value == wanted


def filter_records(
    records: Iterable[NormalizedRecord], filters: FilterSpec, schema: RoleMap
) -> list[NormalizedRecord]:
    """Records passing the product/branch/area equality filters.

    Branch and area filters are ignored when the schema has no such column.
    """
    use_branch = schema.branch_key is not None
    use_area = schema.area_key is not None
    return [
        r
        for r in records
        if _matches(r.product, filters.product)
        and (not use_branch or _matches(r.branch, filters.branch))
        and (not use_area or _matches(r.area, filters.area))
    ]


def aggregate(records: Sequence[NormalizedRecord], dimension: GroupDimension) -> AggregateResult:
    """Sum metrics per group, largest total first.

    Empty labels are reported as "Unspecified"; ties keep the order in which
    the labels first appear.
    """
    if not records:
        return AggregateResult(dimension=dimension)

    frame = pd.DataFrame(
        {
            "label": [r.value_of(dimension.value) or UNSPECIFIED for r in records],
            "metric": [r.metric for r in records],
        }
    )
    # groupby(sort=False) keeps first-appearance order; the stable sort on -total keeps it for ties
    totals = frame.groupby("label", sort=False)["metric"].sum()
    ordered = totals.loc[(-totals).sort_values(kind="stable").index]
    return AggregateResult(
        dimension=dimension,
        pairs=tuple((str(label), float(total)) for label, total in ordered.items()),
    )


def distinct_values(records: Iterable[NormalizedRecord], dimension: GroupDimension) -> list[str]:
    """Unique non-empty values of one dimension, sorted ascending."""
    return sorted({v for v in (r.value_of(dimension.value) for r in records) if v})
