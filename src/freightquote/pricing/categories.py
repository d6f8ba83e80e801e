"""
Category subtotals and structural operations on charge categories.

All operations take the current list of categories and return a new list;
nothing is mutated in place. Unknown category or item ids leave the list
unchanged.

Usage::

    categories = add_category(categories, "Origin Local Charges")
    categories = add_line_item(categories, categories[-1].id, selling=True)
    categories = update_line_item(categories, cat_id, item_id, "base_cost", 1500)
    categories = remove_line_item(categories, cat_id, item_id)  # prunes if emptied
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from freightquote.models.pricing import (
    Category,
    LineItem,
    generate_category_id,
    generate_line_item_id,
)
from freightquote.pricing.amounts import category_subtotal
from freightquote.pricing.line_items import LineItemField, apply_field_edit

logger = logging.getLogger("freightquote.pricing.categories")

DEFAULT_CATEGORY_NAME = "New Category"


def _normalize_name(name: str) -> str:
    return name.strip().lower()


def _name_taken(categories: Iterable[Category], name: str, exclude_id: str | None = None) -> bool:
    wanted = _normalize_name(name)
    return any(cat.id != exclude_id and _normalize_name(cat.name) == wanted for cat in categories)


def with_items(category: Category, items: list[LineItem]) -> Category:
    """Replace a category's items and recompute its subtotal."""
    return category.model_copy(update={"line_items": items, "subtotal": category_subtotal(items)})


def find_category(categories: Iterable[Category], category_id: str) -> Category | None:
    return next((cat for cat in categories if cat.id == category_id), None)


# ---------------------------------------------------------------------------
# Line item operations
# ---------------------------------------------------------------------------


def update_line_item(
    categories: list[Category],
    category_id: str,
    item_id: str,
    field: LineItemField | str,
    value: Any,
) -> list[Category]:
    """Apply a field edit to one line item and recompute its category subtotal."""
    updated: list[Category] = []
    found = False
    for cat in categories:
        if cat.id != category_id:
            updated.append(cat)
            continue
        items = []
        for item in cat.line_items:
            if item.id == item_id:
                found = True
                item = apply_field_edit(item, field, value)
            items.append(item)
        updated.append(with_items(cat, items))

    if not found:
        logger.debug("No line item %s in category %s; edit ignored", item_id, category_id)
        return categories
    return updated


def remove_line_item(
    categories: list[Category],
    category_id: str,
    item_id: str,
    *,
    prune_empty: bool = True,
) -> list[Category]:
    """Remove a line item; a category emptied by the removal is dropped when *prune_empty*."""
    updated: list[Category] = []
    found = False
    for cat in categories:
        if cat.id != category_id:
            updated.append(cat)
            continue
        items = [item for item in cat.line_items if item.id != item_id]
        if len(items) == len(cat.line_items):
            break
        found = True
        if not items and prune_empty:
            logger.info("Category %r is empty after removing %s; dropping it", cat.name, item_id)
            continue
        updated.append(with_items(cat, items))

    if not found:
        logger.debug("No line item %s in category %s; remove ignored", item_id, category_id)
        return categories
    return updated


def new_line_item(
    *,
    selling: bool = False,
    currency: str = "PHP",
    service: str = "",
    vendor_id: str | None = None,
) -> LineItem:
    """A blank pricing row: one unit at zero price, forex rate 1."""
    fields: dict[str, Any] = {
        "id": generate_line_item_id(),
        "quantity": 1,
        "price": 0,
        "currency": currency,
        "forex_rate": 1.0,
        "service": service,
        "vendor_id": vendor_id,
    }
    if selling:
        fields.update(base_cost=0, amount_added=0, percentage_added=0, final_price=0)
    return LineItem(**fields)


def add_line_item(
    categories: list[Category],
    category_id: str,
    item: LineItem | None = None,
    *,
    selling: bool = False,
    currency: str = "PHP",
    service: str = "",
) -> list[Category]:
    """Append *item* (or a blank row) to a category."""
    if find_category(categories, category_id) is None:
        logger.debug("No category %s; add item ignored", category_id)
        return categories
    item = item or new_line_item(selling=selling, currency=currency, service=service)
    return [
        with_items(cat, [*cat.line_items, item]) if cat.id == category_id else cat
        for cat in categories
    ]


# ---------------------------------------------------------------------------
# Category lifecycle
# ---------------------------------------------------------------------------


def add_category(
    categories: list[Category],
    name: str = DEFAULT_CATEGORY_NAME,
    *,
    unique_names: bool = False,
) -> list[Category]:
    """Append an empty category.

    With *unique_names* a case-insensitive clash is resolved by appending a
    counter: ``"Freight"`` becomes ``"Freight 1"``, then ``"Freight 2"``.
    """
    final_name = name
    if unique_names and _name_taken(categories, name):
        counter = 1
        while _name_taken(categories, f"{name} {counter}"):
            counter += 1
        final_name = f"{name} {counter}"
        logger.info("Category %r exists, creating %r", name, final_name)

    category = Category(id=generate_category_id(), name=final_name)
    return [*categories, category]


def rename_category(
    categories: list[Category],
    category_id: str,
    new_name: str,
    *,
    unique_names: bool = False,
) -> list[Category]:
    """Rename a category. With *unique_names* a clash refuses the rename."""
    if unique_names and _name_taken(categories, new_name, exclude_id=category_id):
        logger.warning("Rename refused: a category named %r already exists", new_name)
        return categories
    return [
        cat.model_copy(update={"name": new_name}) if cat.id == category_id else cat
        for cat in categories
    ]


def duplicate_category(
    categories: list[Category],
    category_id: str,
    *,
    unique_names: bool = False,
) -> list[Category]:
    """Append a deep copy of a category with fresh category and line item ids."""
    source = find_category(categories, category_id)
    if source is None:
        logger.debug("No category %s; duplicate ignored", category_id)
        return categories

    new_name = f"{source.name} (Copy)"
    if unique_names:
        counter = 1
        while _name_taken(categories, new_name):
            counter += 1
            new_name = f"{source.name} (Copy {counter})"

    items = [item.model_copy(update={"id": generate_line_item_id()}, deep=True) for item in source.line_items]
    copy = with_items(source.model_copy(update={"id": generate_category_id(), "name": new_name}), items)
    logger.info("Duplicated category %r as %r", source.name, new_name)
    return [*categories, copy]


def delete_category(categories: list[Category], category_id: str) -> list[Category]:
    return [cat for cat in categories if cat.id != category_id]


# ---------------------------------------------------------------------------
# Buying → selling
# ---------------------------------------------------------------------------


def to_selling_categories(buying: Iterable[Category]) -> list[Category]:
    """Turn buying-price categories into selling-price ones at zero markup.

    Each item keeps its id and vendor; ``base_cost`` takes the buying price.
    """
    selling = []
    for cat in buying:
        items = [
            LineItem.model_validate(
                {
                    **item.model_dump(),
                    "base_cost": item.unit_price,
                    "amount_added": 0,
                    "percentage_added": 0,
                    "final_price": item.unit_price,
                }
            )
            for item in cat.line_items
        ]
        selling.append(with_items(cat.model_copy(deep=True), items))
    return selling


def merge_categories(existing: list[Category], incoming: Iterable[Category]) -> list[Category]:
    """Merge *incoming* categories into *existing* by case-insensitive name.

    Items of a matching category are appended to it; unmatched categories are
    appended as they are. Incoming categories without items are skipped.
    """
    merged = list(existing)
    for new_cat in incoming:
        if new_cat.is_empty:
            logger.debug("Skipping empty category %r", new_cat.name)
            continue

        wanted = _normalize_name(new_cat.name)
        index = next((i for i, cat in enumerate(merged) if _normalize_name(cat.name) == wanted), None)
        if index is None:
            logger.info("New category %r with %d items", new_cat.name, len(new_cat.line_items))
            merged.append(new_cat)
            continue

        target = merged[index]
        logger.info(
            "Merging %d items into existing category %r", len(new_cat.line_items), target.name
        )
        merged[index] = with_items(target, [*target.line_items, *new_cat.line_items])
    return merged
