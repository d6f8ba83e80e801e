"""Tests for vendor/category expand-collapse state."""

import pytest

from freightquote.models.pricing import Category, LineItem, Vendor
from freightquote.pricing.expansion import (
    ExpansionState,
    collapse_all,
    collapse_vendor,
    expand_all,
    expand_vendor,
    reconcile_new_vendors,
    toggle_category,
    toggle_vendor,
)
from freightquote.pricing.grouping import CategoryKey, group_by_vendor

VENDORS = [Vendor(vendor_id="v1", name="Acme"), Vendor(vendor_id="v2", name="Globex")]


def _groups(*vendor_ids: str, categories: int = 2):
    cats = [
        Category(
            id=f"c{n}",
            name=f"Category {n}",
            line_items=[LineItem(price=1, vendor_id=vid) for vid in vendor_ids],
        )
        for n in range(categories)
    ]
    return group_by_vendor(cats, VENDORS)


@pytest.fixture
def groups():
    return _groups("v1", "v2")


class TestReconcile:
    def test_first_render_expands_everything(self, groups) -> None:
        state = reconcile_new_vendors(ExpansionState(), groups)
        for group in groups:
            assert state.is_vendor_expanded(group.key)
            for key in group.category_keys():
                assert state.is_category_expanded(key)

    def test_user_collapse_survives_reconcile(self, groups) -> None:
        state = reconcile_new_vendors(ExpansionState(), groups)
        state = collapse_vendor(state, groups[0].key)
        state = reconcile_new_vendors(state, groups)
        assert not state.is_vendor_expanded(groups[0].key)
        assert state.is_vendor_expanded(groups[1].key)

    def test_new_vendor_starts_expanded(self) -> None:
        first = _groups("v1")
        state = reconcile_new_vendors(ExpansionState(), first)
        state = collapse_vendor(state, first[0].key)

        second = _groups("v1", "v3")
        state = reconcile_new_vendors(state, second)
        assert not state.is_vendor_expanded(second[0].key)
        assert state.is_vendor_expanded(second[1].key)
        assert all(state.is_category_expanded(k) for k in second[1].category_keys())

    def test_collapsed_category_stays_collapsed(self, groups) -> None:
        state = reconcile_new_vendors(ExpansionState(), groups)
        key = groups[0].category_keys()[0]
        state = toggle_category(state, key)
        state = reconcile_new_vendors(state, groups)
        assert not state.is_category_expanded(key)

    def test_reconcile_is_pure(self, groups) -> None:
        state = ExpansionState()
        reconcile_new_vendors(state, groups)
        assert state.expanded_vendors == frozenset()


class TestTransitions:
    def test_toggle_vendor_flips_only_that_vendor(self, groups) -> None:
        state = reconcile_new_vendors(ExpansionState(), groups)
        state = toggle_vendor(state, groups[0].key, groups)
        assert not state.is_vendor_expanded(groups[0].key)
        assert state.is_vendor_expanded(groups[1].key)
        state = toggle_vendor(state, groups[0].key, groups)
        assert state.is_vendor_expanded(groups[0].key)

    def test_collapsing_vendor_keeps_category_keys(self, groups) -> None:
        state = reconcile_new_vendors(ExpansionState(), groups)
        key = groups[0].category_keys()[1]
        state = collapse_vendor(state, groups[0].key)
        assert key in state.expanded_categories
        assert not state.is_category_expanded(key)

    def test_expanding_vendor_expands_its_categories(self, groups) -> None:
        state = reconcile_new_vendors(ExpansionState(), groups)
        key = groups[0].category_keys()[0]
        state = toggle_category(state, key)
        state = collapse_vendor(state, groups[0].key)
        state = expand_vendor(state, groups[0].key, groups)
        assert state.is_category_expanded(key)

    def test_toggle_category(self, groups) -> None:
        key = CategoryKey(groups[1].key, "c1")
        state = reconcile_new_vendors(ExpansionState(), groups)
        state = toggle_category(state, key)
        assert not state.is_category_expanded(key)
        assert state.is_category_expanded(CategoryKey(groups[1].key, "c0"))
        state = toggle_category(state, key)
        assert state.is_category_expanded(key)

    def test_collapse_and_expand_all(self, groups) -> None:
        state = collapse_all(reconcile_new_vendors(ExpansionState(), groups))
        assert state.expanded_vendors == frozenset()
        state = expand_all(state, groups)
        assert all(state.is_vendor_expanded(g.key) for g in groups)
