"""
Single-field line item edits that keep derived fields consistent.

Every UI edit on a pricing row comes through :func:`apply_field_edit`: the
edited field is coerced, the markup pair is resynchronised when it is
involved, and the line total is recomputed. Edits never raise; an edit that
does not apply to the item is logged and the item is returned unchanged.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from freightquote.coercion import to_flag, to_non_negative
from freightquote.models.pricing import LineItem
from freightquote.pricing.amounts import recompute_amount
from freightquote.pricing.markup import apply_base_cost, apply_markup_amount, apply_markup_percentage

logger = logging.getLogger("freightquote.pricing.line_items")


class LineItemField(str, Enum):
    """Fields a user can edit on a pricing row."""

    DESCRIPTION = "description"
    UNIT = "unit"
    QUANTITY = "quantity"
    PRICE = "price"
    FINAL_PRICE = "final_price"
    BASE_COST = "base_cost"
    AMOUNT_ADDED = "amount_added"
    PERCENTAGE_ADDED = "percentage_added"
    CURRENCY = "currency"
    FOREX_RATE = "forex_rate"
    IS_TAXED = "is_taxed"
    REMARKS = "remarks"
    SERVICE = "service"
    VENDOR_ID = "vendor_id"


_TEXT_FIELDS = {LineItemField.DESCRIPTION, LineItemField.UNIT, LineItemField.REMARKS, LineItemField.SERVICE}
_MARKUP_FIELDS = {LineItemField.BASE_COST, LineItemField.AMOUNT_ADDED, LineItemField.PERCENTAGE_ADDED}
_DIRECT_PRICE_FIELDS = {LineItemField.PRICE, LineItemField.FINAL_PRICE}

# "service_tag" is the older name of the service field
_FIELD_ALIASES = {"service_tag": LineItemField.SERVICE}


def _resolve_field(field: LineItemField | str) -> LineItemField | None:
    if isinstance(field, LineItemField):
        return field
    if field in _FIELD_ALIASES:
        return _FIELD_ALIASES[field]
    try:
        return LineItemField(field)
    except ValueError:
        return None


def apply_field_edit(item: LineItem, field: LineItemField | str, value: Any) -> LineItem:
    """Return a copy of *item* with *field* set to *value* and totals recomputed."""
    resolved = _resolve_field(field)
    if resolved is None:
        logger.warning("Ignoring edit of unknown or derived field %r on line item %s", field, item.id)
        return item

    if resolved in _MARKUP_FIELDS:
        if not item.is_selling:
            logger.warning("Ignoring %s edit on buying-price line item %s", resolved.value, item.id)
            return item
        if resolved is LineItemField.BASE_COST:
            return apply_base_cost(item, value)
        if resolved is LineItemField.AMOUNT_ADDED:
            return apply_markup_amount(item, value)
        return apply_markup_percentage(item, value)

    if resolved in _DIRECT_PRICE_FIELDS:
        if item.is_selling:
            logger.warning(
                "Ignoring direct %s edit on selling-price line item %s; edit base cost or markup instead",
                resolved.value,
                item.id,
            )
            return item
        price = to_non_negative(value)
        update = {"price": price}
        # Both names refer to the one charged price on a buying item
        if resolved is LineItemField.FINAL_PRICE or item.final_price is not None:
            update["final_price"] = price
        return recompute_amount(item.model_copy(update=update))

    if resolved in (LineItemField.QUANTITY, LineItemField.FOREX_RATE):
        return recompute_amount(item.model_copy(update={resolved.value: to_non_negative(value)}))

    if resolved is LineItemField.IS_TAXED:
        return item.model_copy(update={"is_taxed": to_flag(value)})

    if resolved is LineItemField.VENDOR_ID:
        return item.model_copy(update={"vendor_id": str(value) if value not in (None, "") else None})

    if resolved is LineItemField.CURRENCY:
        return item.model_copy(update={"currency": str(value or "").strip().upper() or item.currency})

    if resolved in _TEXT_FIELDS:
        return item.model_copy(update={resolved.value: "" if value is None else str(value)})

    return item
