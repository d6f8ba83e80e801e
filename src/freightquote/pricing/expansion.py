"""
Expand/collapse state for the vendor view of a price section.

State is a plain immutable value owned by whoever renders the grouping. Each
transition returns a new :class:`ExpansionState`.

Rules:

- Vendors that appear for the first time start expanded; vendors seen before
  keep whatever the user last chose.
- Expanding a vendor expands all of its categories.
- Collapsing a vendor leaves its category keys alone, so they come back in
  their last state.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace

from freightquote.pricing.grouping import CategoryKey, VendorGroup, VendorKey


@dataclass(frozen=True)
class ExpansionState:
    expanded_vendors: frozenset[VendorKey] = field(default_factory=frozenset)
    expanded_categories: frozenset[CategoryKey] = field(default_factory=frozenset)
    seen_vendors: frozenset[VendorKey] = field(default_factory=frozenset)
    seen_categories: frozenset[CategoryKey] = field(default_factory=frozenset)

    def is_vendor_expanded(self, key: VendorKey) -> bool:
        return key in self.expanded_vendors

    def is_category_expanded(self, key: CategoryKey) -> bool:
        """A category shows open only when it and its vendor are expanded."""
        return key.vendor in self.expanded_vendors and key in self.expanded_categories


def _categories_of(groups: Iterable[VendorGroup], vendor: VendorKey) -> list[CategoryKey]:
    for group in groups:
        if group.key == vendor:
            return group.category_keys()
    return []


def reconcile_new_vendors(state: ExpansionState, groups: list[VendorGroup]) -> ExpansionState:
    """Fold a freshly derived grouping into *state*.

    New vendors are expanded. Inside expanded vendors, categories that were
    never seen before are expanded too.
    """
    vendor_keys = [group.key for group in groups]
    new_vendors = {key for key in vendor_keys if key not in state.seen_vendors}
    expanded_vendors = state.expanded_vendors | new_vendors

    all_categories = {key for group in groups for key in group.category_keys()}
    new_categories = {
        key for key in all_categories
        if key not in state.seen_categories and key.vendor in expanded_vendors
    }

    return ExpansionState(
        expanded_vendors=expanded_vendors,
        expanded_categories=state.expanded_categories | new_categories,
        seen_vendors=state.seen_vendors | set(vendor_keys),
        # Categories of collapsed vendors stay unseen until the vendor opens
        seen_categories=state.seen_categories | {key for key in all_categories if key.vendor in expanded_vendors},
    )


def expand_vendor(state: ExpansionState, key: VendorKey, groups: list[VendorGroup]) -> ExpansionState:
    categories = _categories_of(groups, key)
    return replace(
        state,
        expanded_vendors=state.expanded_vendors | {key},
        expanded_categories=state.expanded_categories | set(categories),
        seen_vendors=state.seen_vendors | {key},
        seen_categories=state.seen_categories | set(categories),
    )


def collapse_vendor(state: ExpansionState, key: VendorKey) -> ExpansionState:
    return replace(state, expanded_vendors=state.expanded_vendors - {key})


def toggle_vendor(state: ExpansionState, key: VendorKey, groups: list[VendorGroup]) -> ExpansionState:
    if key in state.expanded_vendors:
        return collapse_vendor(state, key)
    return expand_vendor(state, key, groups)


def toggle_category(state: ExpansionState, key: CategoryKey) -> ExpansionState:
    if key in state.expanded_categories:
        expanded = state.expanded_categories - {key}
    else:
        expanded = state.expanded_categories | {key}
    return replace(state, expanded_categories=expanded, seen_categories=state.seen_categories | {key})


def expand_all(state: ExpansionState, groups: list[VendorGroup]) -> ExpansionState:
    for group in groups:
        state = expand_vendor(state, group.key, groups)
    return state


def collapse_all(state: ExpansionState) -> ExpansionState:
    return replace(state, expanded_vendors=frozenset())
