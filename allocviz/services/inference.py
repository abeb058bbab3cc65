from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.config_models import ROLES, InferenceConfig
from ..models.role_map import RoleMap
from ..text.numbers import looks_numeric

"""Column-role inference.

Guesses, from header names and sample values only, which column holds the
product, branch, area, item and metric, and whether the table is in wide
format (one product per numeric column). Never raises: the worst case is an
empty role map with a synthetic product label. Callers check
``RoleMap.is_sufficient`` themselves.
"""

__all__ = [
    "infer_roles",
    "match_roles",
    "numeric_headers",
]

logger = logging.getLogger(__name__)

# Leading region column is only trusted with more than this many values
_AREA_FALLBACK_MIN_VALUES = 3


def match_roles(headers: Sequence[str], config: InferenceConfig) -> dict[str, str | None]:
    """Resolve each role to the first header whose lowercased name is a keyword."""
    lower = [h.lower() for h in headers]
    matched: dict[str, str | None] = {}
    for role in ROLES:
        keywords = config.keywords_for(role)
        idx = next((i for i, h in enumerate(lower) if h in keywords), None)
        matched[role] = headers[idx] if idx is not None else None
    return matched


def numeric_headers(headers: Sequence[str], rows: Sequence[dict[str, str]]) -> list[str]:
    """Headers with at least one numeric cell, in declared order."""
    return [h for h in headers if any(looks_numeric(r.get(h)) for r in rows)]


def _area_fallback(
    headers: Sequence[str], rows: Sequence[dict[str, str]], branch_key: str | None
) -> str | None:
    if not headers or branch_key is None:
        return None
    first = headers[0]
    if first == branch_key:
        return None
    values = [str(r.get(first) or "").strip() for r in rows]
    values = [v for v in values if v]
    all_numeric = bool(values) and all(looks_numeric(v) for v in values)
    if len(values) > _AREA_FALLBACK_MIN_VALUES and not all_numeric:
        return first
    return None


def _fixed_position_products(headers: Sequence[str], config: InferenceConfig) -> list[str]:
    """Known product names inside the fixed column band.

    Special case for the allocation sheet layout, where product columns always
    occupy the same positions even when some of their cells are not numeric.
    """
    start, end = config.fixed_product_positions
    band = [h for h in headers[start - 1:end] if h]
    return [h for h in band if h.lower() in config.fixed_product_names]


def _band_headers(headers: Sequence[str], config: InferenceConfig) -> list[str]:
    start, end = config.fixed_product_positions
    return [h for h in headers[start - 1:end] if h and h.strip()]


def _synthetic_label(
    raw_headers: Sequence[str], metric_key: str | None, config: InferenceConfig
) -> str:
    for raw in raw_headers:
        text = (raw or "").strip()
        if not text:
            continue
        lowered = text.lower()
        if any(banned in lowered for banned in config.synthetic_label_denylist):
            continue
        return text
    return metric_key or config.default_product_label


def infer_roles(
    headers: Sequence[str],
    raw_headers: Sequence[str],
    rows: Sequence[dict[str, str]],
    config: InferenceConfig | None = None,
) -> RoleMap:
    config = config or InferenceConfig()
    matched = match_roles(headers, config)
    product_key = matched.get("product")
    branch_key = matched.get("branch")
    area_key = matched.get("area")
    item_key = matched.get("item")
    metric_key = matched.get("metric")

    if area_key is None:
        area_key = _area_fallback(headers, rows, branch_key)
        if area_key is not None:
            logger.debug(f"area fallback: using first column '{area_key}'")

    reserved = {k.lower() for k in (product_key, branch_key, area_key, item_key) if k}
    product_columns = [h for h in numeric_headers(headers, rows) if h.lower() not in reserved]

    fixed = _fixed_position_products(headers, config)
    if fixed:
        logger.debug(f"fixed-position product columns: {fixed}")
        product_columns = fixed
    elif not product_columns and len(headers) >= 3:
        product_columns = _band_headers(headers, config)

    if metric_key is None and len(product_columns) == 1:
        metric_key = product_columns[0]

    synthetic = product_key is None and not product_columns
    label = config.default_product_label
    if synthetic:
        label = _synthetic_label(raw_headers, metric_key, config)

    roles = RoleMap(
        product_key=product_key,
        branch_key=branch_key,
        area_key=area_key,
        item_key=item_key,
        metric_key=metric_key,
        product_columns=tuple(product_columns),
        synthetic_product=synthetic,
        synthetic_product_label=label,
        headers=tuple(headers),
        raw_headers=tuple(raw_headers),
    )
    logger.debug(
        f"roles: product={product_key} branch={branch_key} area={area_key} item={item_key} "
        f"metric={metric_key} product_columns={list(product_columns)} synthetic={synthetic}"
    )
    return roles
