from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

"""FilterSpec model and GroupDimension enum.

A FilterSpec holds the equality constraints selected by the user plus the
dimension the chart is grouped by. ``None`` means "no constraint".
"""

__all__ = [
    "ALL",
    "FilterSpec",
    "GroupDimension",
]

# Serialized form of "no constraint"
ALL = "__all"


class GroupDimension(Enum):
    """Dimensions a chart can be grouped by."""
    PRODUCT = "product"
    BRANCH = "branch"
    AREA = "area"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class FilterSpec:
    product: str | None = None
    branch: str | None = None
    area: str | None = None
    group: GroupDimension = GroupDimension.PRODUCT

    def with_changes(self, **changes: Any) -> FilterSpec:
        return replace(self, **changes)

    def to_dict(self) -> dict[str, str]:
        return {
            "product": ALL if self.product is None else self.product,
            "branch": ALL if self.branch is None else self.branch,
            "area": ALL if self.area is None else self.area,
            "group": self.group.value,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> FilterSpec:
        def _constraint(key: str) -> str | None:
            value = data.get(key, ALL)
            return None if value in (None, ALL) else str(value)

        try:
            group = GroupDimension(data.get("group", GroupDimension.PRODUCT.value))
        except ValueError:
            group = GroupDimension.PRODUCT
        return FilterSpec(
            product=_constraint("product"),
            branch=_constraint("branch"),
            area=_constraint("area"),
            group=group,
        )
