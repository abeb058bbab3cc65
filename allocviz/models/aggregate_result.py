from __future__ import annotations

from dataclasses import dataclass

from .filter_spec import GroupDimension

"""AggregateResult: ordered group totals handed to the presentation layer."""

__all__ = [
    "AggregateResult",
]


@dataclass(frozen=True)
class AggregateResult:
    dimension: GroupDimension
    pairs: tuple[tuple[str, float], ...] = ()  # (label, total), total descending

    @property
    def is_empty(self) -> bool:
        """No groups produced; distinct from groups whose totals are zero."""
        return not self.pairs

    @property
    def labels(self) -> list[str]:
        return [label for label, _ in self.pairs]

    @property
    def totals(self) -> list[float]:
        return [total for _, total in self.pairs]
