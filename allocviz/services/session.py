from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..models.aggregate_result import AggregateResult
from ..models.filter_spec import FilterSpec, GroupDimension
from ..models.ingest_result import IngestResult
from ..models.record import NormalizedRecord
from ..models.session_state import SessionState
from . import aggregator
from .ingestion import default_group

"""Session context: owner of the current (records, schema, filters) triple.

The context is created and held by the caller (CLI, tests). Every mutation
builds a new SessionState and swaps it in with a single assignment; all views
are computed from one state snapshot.
"""

__all__ = [
    "SelectionSummary",
    "SessionContext",
]

_FILTER_FIELDS = ("product", "branch", "area", "group")


@dataclass(frozen=True)
class SelectionSummary:
    rows: int
    total: float


class SessionContext:
    def __init__(self, state: SessionState | None = None) -> None:
        self._state = self._normalized(state or SessionState.empty())

    @property
    def state(self) -> SessionState:
        return self._state

    # -- lifecycle ---------------------------------------------------------

    def load(self, result: IngestResult) -> SessionState:
        """Replace the session with a freshly ingested file."""
        self._state = SessionState(
            records=tuple(result.records),
            schema=result.schema,
            filters=FilterSpec(group=default_group(result.schema)),
        )
        return self._state

    def restore(self, state: SessionState) -> SessionState:
        self._state = self._normalized(state)
        return self._state

    def reset(self) -> SessionState:
        self._state = SessionState.empty()
        return self._state

    def update_filters(self, **changes: Any) -> FilterSpec:
        """Apply filter changes; selecting an area clears the branch filter."""
        unknown = set(changes) - set(_FILTER_FIELDS)
        if unknown:
            raise ValueError(f"unknown filter fields: {sorted(unknown)}")
        if "group" in changes and not isinstance(changes["group"], GroupDimension):
            changes["group"] = GroupDimension(changes["group"])
        if "area" in changes and "branch" not in changes:
            changes["branch"] = None
        state = self._state
        filters = state.filters.with_changes(**changes)
        self._state = self._normalized(SessionState(state.records, state.schema, filters))
        return self._state.filters

    def _normalized(self, state: SessionState) -> SessionState:
        # Fall back to the first available group when the chosen one has no column
        options = self._group_options(state)
        if state.filters.group in options:
            return state
        filters = state.filters.with_changes(group=options[0])
        return SessionState(state.records, state.schema, filters)

    # -- option lists ------------------------------------------------------

    @staticmethod
    def _group_options(state: SessionState) -> list[GroupDimension]:
        opts = [GroupDimension.PRODUCT]
        if state.schema.branch_key:
            opts.append(GroupDimension.BRANCH)
        if state.schema.area_key:
            opts.append(GroupDimension.AREA)
        return opts

    def group_options(self) -> list[GroupDimension]:
        return self._group_options(self._state)

    def product_options(self) -> list[str]:
        return aggregator.distinct_values(self._state.records, GroupDimension.PRODUCT)

    def area_options(self) -> list[str]:
        state = self._state
        if not state.schema.area_key:
            return []
        return aggregator.distinct_values(state.records, GroupDimension.AREA)

    def branch_options(self) -> list[str]:
        """Branches, scoped to the selected area when one is active."""
        state = self._state
        if not state.schema.branch_key:
            return []
        records: tuple[NormalizedRecord, ...] | list[NormalizedRecord] = state.records
        if state.filters.area is not None and state.schema.area_key:
            records = [r for r in state.records if r.area == state.filters.area]
        return aggregator.distinct_values(records, GroupDimension.BRANCH)

    # -- views -------------------------------------------------------------

    def effective_group(self) -> GroupDimension:
        """A single selected branch is always broken down by product."""
        state = self._state
        if state.schema.branch_key and state.filters.branch is not None:
            return GroupDimension.PRODUCT
        return state.filters.group

    def filtered_records(self) -> list[NormalizedRecord]:
        state = self._state
        return aggregator.filter_records(state.records, state.filters, state.schema)

    def aggregate(self) -> AggregateResult:
        return aggregator.aggregate(self.filtered_records(), self.effective_group())

    def summary(self) -> SelectionSummary:
        records = self.filtered_records()
        return SelectionSummary(rows=len(records), total=sum(r.metric for r in records))

    def preview(self, limit: int = 10) -> list[NormalizedRecord]:
        return self.filtered_records()[:limit]

    def filter_description(self) -> str:
        state = self._state
        parts = []
        if state.filters.product is not None:
            parts.append(f"Product: {state.filters.product}")
        if state.schema.branch_key and state.filters.branch is not None:
            parts.append(f"Branch: {state.filters.branch}")
        if state.schema.area_key and state.filters.area is not None:
            parts.append(f"Area: {state.filters.area}")
        return " | ".join(parts) if parts else "No filters"

    def metric_label(self) -> str:
        schema = self._state.schema
        if schema.product_columns:
            return "Metric: product column values"
        return f"Metric: {schema.metric_key or 'first numeric column'}"
