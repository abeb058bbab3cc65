from __future__ import annotations

import pytest

from allocviz.models.filter_spec import FilterSpec, GroupDimension
from allocviz.models.record import NormalizedRecord
from allocviz.models.role_map import RoleMap
from allocviz.services.aggregator import UNSPECIFIED, aggregate, distinct_values, filter_records


def _rec(product="", branch="", area="", metric=0.0, item=""):
    return NormalizedRecord(product=product, item=item, branch=branch, area=area, metric=metric)


@pytest.fixture()
def records() -> list[NormalizedRecord]:
    return [
        _rec("Backribs", "Makati", "North", 10),
        _rec("Spareribs", "Makati", "North", 5),
        _rec("Backribs", "Ortigas", "North", 1200),
        _rec("Spareribs", "Ortigas", "North", 3),
        _rec("Backribs", "Alabang", "South", 4),
        _rec("Spareribs", "Alabang", "South", 0),
    ]


def test_ties_keep_first_encountered_order():
    recs = [_rec("A", metric=3), _rec("B", metric=5), _rec("A", metric=2)]
    result = aggregate(recs, GroupDimension.PRODUCT)
    assert list(result.pairs) == [("A", 5.0), ("B", 5.0)]


def test_sorted_by_total_descending(records):
    result = aggregate(records, GroupDimension.BRANCH)
    assert list(result.pairs) == [("Ortigas", 1203.0), ("Makati", 15.0), ("Alabang", 4.0)]
    assert result.labels == ["Ortigas", "Makati", "Alabang"]
    assert result.totals == [1203.0, 15.0, 4.0]


def test_empty_label_grouped_as_unspecified():
    recs = [_rec("A", branch="", metric=1), _rec("A", branch="East", metric=2), _rec("B", metric=4)]
    result = aggregate(recs, GroupDimension.BRANCH)
    assert list(result.pairs) == [(UNSPECIFIED, 5.0), ("East", 2.0)]


def test_empty_aggregate_is_flagged():
    result = aggregate([], GroupDimension.AREA)
    assert result.is_empty
    assert result.dimension is GroupDimension.AREA


def test_zero_totals_are_not_empty():
    result = aggregate([_rec("A", metric=0)], GroupDimension.PRODUCT)
    assert not result.is_empty
    assert list(result.pairs) == [("A", 0.0)]


def test_filter_exact_case_sensitive(records):
    schema = RoleMap(branch_key="Branch", area_key="Area", product_columns=("Backribs", "Spareribs"))
    out = filter_records(records, FilterSpec(product="Backribs", area="North"), schema)
    assert [r.branch for r in out] == ["Makati", "Ortigas"]
    assert filter_records(records, FilterSpec(product="backribs"), schema) == []


def test_filter_ignores_dimensions_missing_from_schema(records):
    schema = RoleMap(product_columns=("Backribs", "Spareribs"))
    out = filter_records(records, FilterSpec(branch="Nowhere", area="Nowhere"), schema)
    assert out == records


def test_filter_is_idempotent(records):
    schema = RoleMap(branch_key="Branch", area_key="Area", product_columns=("Backribs", "Spareribs"))
    spec = FilterSpec(area="North", group=GroupDimension.PRODUCT)
    first = aggregate(filter_records(records, spec, schema), spec.group)
    second = aggregate(filter_records(records, spec, schema), spec.group)
    assert first == second
    assert list(first.pairs) == [("Backribs", 1210.0), ("Spareribs", 8.0)]


def test_distinct_values_sorted_non_empty(records):
    recs = records + [_rec("Backribs", branch="", area="")]
    assert distinct_values(recs, GroupDimension.BRANCH) == ["Alabang", "Makati", "Ortigas"]
    assert distinct_values(recs, GroupDimension.PRODUCT) == ["Backribs", "Spareribs"]
    assert distinct_values([], GroupDimension.AREA) == []
