from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

"""RoleMap model: schema inferencer output.

Each role key names a header present in the parsed table, or is None when no
column could be matched to that role.
"""

__all__ = [
    "DEFAULT_PRODUCT_LABEL",
    "RoleMap",
]

DEFAULT_PRODUCT_LABEL = "All Products"


@dataclass(frozen=True)
class RoleMap:
    """Semantic role assignment for the columns of one parsed table.

    ``product_columns`` non-empty means wide format: every listed header is a
    product category whose cells hold the metric. The expander prefers it over
    ``product_key`` when both are set.
    """
    product_key: str | None = None
    branch_key: str | None = None
    area_key: str | None = None
    item_key: str | None = None
    metric_key: str | None = None
    product_columns: tuple[str, ...] = ()
    synthetic_product: bool = False
    synthetic_product_label: str = DEFAULT_PRODUCT_LABEL
    headers: tuple[str, ...] = field(default=())
    raw_headers: tuple[str, ...] = field(default=())

    @property
    def is_wide(self) -> bool:
        return bool(self.product_columns)

    @property
    def is_sufficient(self) -> bool:
        """True when at least one metric source was found."""
        return self.metric_key is not None or bool(self.product_columns)

    def to_dict(self) -> dict[str, Any]:
        return {
            "headers": list(self.headers),
            "productKey": self.product_key,
            "branchKey": self.branch_key,
            "areaKey": self.area_key,
            "itemKey": self.item_key,
            "metricKey": self.metric_key,
            "productColumns": list(self.product_columns),
            "syntheticProduct": self.synthetic_product,
            "syntheticProductLabel": self.synthetic_product_label,
            "rawHeaders": list(self.raw_headers),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> RoleMap:
        return RoleMap(
            product_key=data.get("productKey"),
            branch_key=data.get("branchKey"),
            area_key=data.get("areaKey"),
            item_key=data.get("itemKey"),
            metric_key=data.get("metricKey"),
            product_columns=tuple(data.get("productColumns") or ()),
            synthetic_product=bool(data.get("syntheticProduct", False)),
            synthetic_product_label=data.get("syntheticProductLabel") or DEFAULT_PRODUCT_LABEL,
            headers=tuple(data.get("headers") or ()),
            raw_headers=tuple(data.get("rawHeaders") or ()),
        )
