from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .role_map import DEFAULT_PRODUCT_LABEL

"""Config dataclasses for the allocation visualizer.

InferenceConfig carries the keyword tables used by the schema inferencer;
AppConfig wraps it together with CLI/session settings. Both are built by
allocviz.config.loader from YAML, falling back to the defaults below.
"""

__all__ = [
    "ROLES",
    "DEFAULT_ROLE_KEYWORDS",
    "DEFAULT_FIXED_PRODUCT_POSITIONS",
    "DEFAULT_FIXED_PRODUCT_NAMES",
    "DEFAULT_SYNTHETIC_DENYLIST",
    "DEFAULT_SESSION_PATH",
    "InferenceConfig",
    "AppConfig",
]

ROLES = ("product", "branch", "area", "item", "metric")

# Ordered (role, keywords) table; header names are compared lowercased
DEFAULT_ROLE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("product", ("product", "item", "sku", "product name", "material", "pork bbq")),
    ("branch", ("branch", "store", "location", "office")),
    ("area", ("area", "region", "zone", "territory")),
    ("item", ("item description", "item", "description", "item desc")),
    (
        "metric",
        (
            "alloc",
            "average",
            "avg",
            "value",
            "amount",
            "metric",
            "qty",
            "quantity",
            "total",
            "sales",
            "volume",
            "pork bbq",
            "daily sales",
            "kg conversion per pc",
        ),
    ),
)

# Allocation sheet layout: product columns sit at positions 3-7 (1-indexed)
DEFAULT_FIXED_PRODUCT_POSITIONS = (3, 7)
DEFAULT_FIXED_PRODUCT_NAMES = ("backribs", "chicken paa", "chicken pecho", "pork bbq", "spareribs")

DEFAULT_SYNTHETIC_DENYLIST = (
    "sum",
    "avg",
    "average",
    "alloc",
    "allocation",
    "conversion",
    "target",
    "total",
    "uom",
    "branch",
    "area",
    "metric",
    "value",
    "amount",
    "qty",
    "quantity",
    "sales",
    "volume",
    "%",
    "kg",
)

DEFAULT_SESSION_PATH = Path(".allocviz") / "session.json"


@dataclass(frozen=True)
class InferenceConfig:
    """Heuristic tables for column-role inference."""
    role_keywords: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_ROLE_KEYWORDS
    fixed_product_positions: tuple[int, int] = DEFAULT_FIXED_PRODUCT_POSITIONS  # 1-indexed, inclusive
    fixed_product_names: tuple[str, ...] = DEFAULT_FIXED_PRODUCT_NAMES
    synthetic_label_denylist: tuple[str, ...] = DEFAULT_SYNTHETIC_DENYLIST
    default_product_label: str = DEFAULT_PRODUCT_LABEL

    def keywords_for(self, role: str) -> tuple[str, ...]:
        for name, keywords in self.role_keywords:
            if name == role:
                return keywords
        return ()


@dataclass(frozen=True)
class AppConfig:
    """Root configuration object for the CLI."""
    inference: InferenceConfig = field(default_factory=InferenceConfig)
    session_path: Path = DEFAULT_SESSION_PATH
    preview_rows: int = 10
