from __future__ import annotations

import pytest

from allocviz.models.filter_spec import FilterSpec, GroupDimension
from allocviz.models.record import NormalizedRecord
from allocviz.models.role_map import RoleMap
from allocviz.models.session_state import SessionState
from allocviz.services.ingestion import ingest_text
from allocviz.services.session import SessionContext


@pytest.fixture()
def ctx(allocation_csv: str) -> SessionContext:
    context = SessionContext()
    context.load(ingest_text(allocation_csv))
    return context


def test_load_sets_default_group_and_clears_filters(ctx: SessionContext):
    state = ctx.state
    assert len(state.records) == 6
    assert state.filters == FilterSpec(group=GroupDimension.BRANCH)
    assert ctx.group_options() == [GroupDimension.PRODUCT, GroupDimension.BRANCH, GroupDimension.AREA]


def test_option_lists(ctx: SessionContext):
    assert ctx.product_options() == ["Backribs", "Spareribs"]
    assert ctx.area_options() == ["North", "South"]
    assert ctx.branch_options() == ["Alabang", "Makati", "Ortigas"]


def test_branch_options_scoped_to_selected_area(ctx: SessionContext):
    ctx.update_filters(area="North")
    assert ctx.branch_options() == ["Makati", "Ortigas"]


def test_area_change_clears_branch(ctx: SessionContext):
    ctx.update_filters(branch="Makati")
    filters = ctx.update_filters(area="South")
    assert filters.branch is None
    assert filters.area == "South"


def test_selected_branch_groups_by_product(ctx: SessionContext):
    ctx.update_filters(area="North", branch="Makati")
    assert ctx.effective_group() is GroupDimension.PRODUCT
    assert list(ctx.aggregate().pairs) == [("Backribs", 10.0), ("Spareribs", 5.0)]
    assert ctx.filter_description() == "Branch: Makati | Area: North"
    summary = ctx.summary()
    assert summary.rows == 2
    assert summary.total == 15.0


def test_default_aggregate_by_branch(ctx: SessionContext):
    result = ctx.aggregate()
    assert result.dimension is GroupDimension.BRANCH
    assert list(result.pairs) == [("Ortigas", 1203.0), ("Makati", 15.0), ("Alabang", 4.0)]
    assert ctx.filter_description() == "No filters"
    assert ctx.metric_label() == "Metric: product column values"


def test_group_falls_back_when_column_missing():
    context = SessionContext()
    context.load(ingest_text("Product,Qty\nA,1\nB,2\n"))
    assert context.state.filters.group is GroupDimension.PRODUCT
    filters = context.update_filters(group="branch")
    assert filters.group is GroupDimension.PRODUCT
    assert context.group_options() == [GroupDimension.PRODUCT]
    assert context.branch_options() == []
    assert context.area_options() == []


def test_update_filters_rejects_unknown_field(ctx: SessionContext):
    with pytest.raises(ValueError):
        ctx.update_filters(colour="red")


def test_restore_normalizes_unavailable_group():
    records = (NormalizedRecord(product="A", item="", branch="", area="", metric=1.0),)
    state = SessionState(records=records, schema=RoleMap(metric_key="Qty"), filters=FilterSpec(group=GroupDimension.AREA))
    context = SessionContext()
    restored = context.restore(state)
    assert restored.filters.group is GroupDimension.PRODUCT
    assert restored.records == records
    assert context.metric_label() == "Metric: Qty"


def test_reset_replaces_whole_state(ctx: SessionContext):
    before = ctx.state
    ctx.reset()
    assert ctx.state is not before
    assert not ctx.state.has_data
    assert ctx.aggregate().is_empty
    assert ctx.metric_label() == "Metric: first numeric column"


def test_filter_changes_swap_state_object(ctx: SessionContext):
    before = ctx.state
    ctx.update_filters(product="Backribs")
    after = ctx.state
    assert before is not after
    assert before.filters.product is None
    assert after.records is before.records


def test_preview_limits_filtered_records(ctx: SessionContext):
    ctx.update_filters(product="Spareribs")
    preview = ctx.preview(2)
    assert [r.branch for r in preview] == ["Makati", "Ortigas"]
