"""
Vendor grouping: the vendor → category → line item view of a price section.

The view is a pure projection of the category list and is rebuilt on every
read; it never owns line items. Grouping preserves first-seen order at both
levels, so the same input always produces the same output.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import NamedTuple

from freightquote.models.pricing import Category, LineItem, Vendor

logger = logging.getLogger("freightquote.pricing.grouping")

NO_VENDOR_ID = "no-vendor"
NO_VENDOR_NAME = "No Vendor"
UNASSIGNED_SERVICE = "Unassigned"
UNNAMED_CATEGORY = "Unnamed Category"


class VendorKey(NamedTuple):
    """Identity of a vendor group.

    The resolved service is part of the key, so one vendor quoted under two
    services yields two groups.
    """

    vendor_id: str
    vendor_name: str
    service: str


class CategoryKey(NamedTuple):
    """Identity of a category inside one vendor group."""

    vendor: VendorKey
    category_id: str


@dataclass
class CategoryGroup:
    category_id: str
    category_name: str
    line_items: list[LineItem] = field(default_factory=list)
    subtotal: float = 0.0


@dataclass
class VendorGroup:
    vendor_id: str
    vendor_name: str
    vendor_service: str
    categories: list[CategoryGroup] = field(default_factory=list)
    subtotal: float = 0.0

    @property
    def key(self) -> VendorKey:
        return VendorKey(self.vendor_id, self.vendor_name, self.vendor_service)

    def category_keys(self) -> list[CategoryKey]:
        return [CategoryKey(self.key, cat.category_id) for cat in self.categories]

    @property
    def item_count(self) -> int:
        return sum(len(cat.line_items) for cat in self.categories)


def resolve_vendor(item: LineItem, lookup: dict[str, Vendor]) -> VendorKey:
    """Resolve the vendor group an item belongs to.

    A known ``vendor_id`` takes the directory name and service tag; an
    unknown one gets a synthesized ``"Vendor <id>"`` name; no ``vendor_id``
    means the "No Vendor" group. The item's own service wins over the
    vendor's service tag.
    """
    vendor_service = ""
    if item.vendor_id is None:
        vendor_id, vendor_name = NO_VENDOR_ID, NO_VENDOR_NAME
    else:
        vendor_id = item.vendor_id
        vendor = lookup.get(item.vendor_id)
        if vendor is not None:
            vendor_name = vendor.name
            vendor_service = vendor.service_tag
        else:
            logger.debug("Vendor %s not in directory; using fallback name", item.vendor_id)
            vendor_name = f"Vendor {item.vendor_id}"

    service = item.service or vendor_service or UNASSIGNED_SERVICE
    return VendorKey(vendor_id, vendor_name, service)


def build_vendor_lookup(vendors: Iterable[Vendor] | None) -> dict[str, Vendor]:
    """Index directory rows by ``vendor_id``; the first row for an id wins."""
    lookup: dict[str, Vendor] = {}
    for vendor in vendors or ():
        lookup.setdefault(vendor.vendor_id, vendor)
    return lookup


def group_by_vendor(
    categories: Iterable[Category],
    vendors: Iterable[Vendor] | None = None,
) -> list[VendorGroup]:
    """Group every line item by resolved vendor, then by category."""
    lookup = build_vendor_lookup(vendors)

    # dicts keep insertion order, which fixes the output order
    buckets: dict[VendorKey, dict[tuple[str, str], list[LineItem]]] = {}
    for category in categories:
        category_name = category.name or UNNAMED_CATEGORY
        for item in category.line_items:
            vendor_key = resolve_vendor(item, lookup)
            by_category = buckets.setdefault(vendor_key, {})
            by_category.setdefault((category.id, category_name), []).append(item)

    groups: list[VendorGroup] = []
    for vendor_key, by_category in buckets.items():
        category_groups = [
            CategoryGroup(
                category_id=category_id,
                category_name=category_name,
                line_items=items,
                subtotal=sum(item.amount for item in items),
            )
            for (category_id, category_name), items in by_category.items()
        ]
        groups.append(
            VendorGroup(
                vendor_id=vendor_key.vendor_id,
                vendor_name=vendor_key.vendor_name,
                vendor_service=vendor_key.service,
                categories=category_groups,
                subtotal=sum(cat.subtotal for cat in category_groups),
            )
        )
    return groups
