from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

"""NormalizedRecord: the atomic unit consumed by filtering and aggregation."""

__all__ = [
    "NormalizedRecord",
]


@dataclass(frozen=True)
class NormalizedRecord:
    """One (source row x metric column) observation.

    Text fields are trimmed and empty when the role is absent from the schema.
    ``metric`` is always a finite float.
    """
    product: str
    item: str
    branch: str
    area: str
    metric: float

    def value_of(self, dimension: str) -> str:
        return getattr(self, dimension)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @staticmethod
    def from_dict(data: dict[str, Any]) -> NormalizedRecord:
        return NormalizedRecord(
            product=str(data.get("product", "")),
            item=str(data.get("item", "")),
            branch=str(data.get("branch", "")),
            area=str(data.get("area", "")),
            metric=float(data.get("metric", 0.0)),
        )
