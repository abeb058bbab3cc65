from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .filter_spec import FilterSpec
from .record import NormalizedRecord
from .role_map import RoleMap

"""SessionState model: the (records, schema, filters) triple of one session.

The triple is only ever replaced as a whole, so readers never observe an old
record set paired with a new schema.
"""

__all__ = [
    "SessionState",
]


@dataclass(frozen=True)
class SessionState:
    records: tuple[NormalizedRecord, ...] = ()
    schema: RoleMap = field(default_factory=RoleMap)
    filters: FilterSpec = field(default_factory=FilterSpec)

    @staticmethod
    def empty() -> SessionState:
        return SessionState()

    @property
    def has_data(self) -> bool:
        return bool(self.records)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rows": [r.to_dict() for r in self.records],
            "meta": self.schema.to_dict(),
            "filters": self.filters.to_dict(),
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> SessionState:
        return SessionState(
            records=tuple(NormalizedRecord.from_dict(r) for r in data.get("rows") or ()),
            schema=RoleMap.from_dict(data.get("meta") or {}),
            filters=FilterSpec.from_dict(data.get("filters") or {}),
        )
