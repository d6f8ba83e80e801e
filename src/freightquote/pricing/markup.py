"""
Markup bookkeeping: keeps the markup amount and markup percentage in step.

For a selling-price line item::

    amount_added = base_cost × percentage_added / 100
    final_price  = base_cost + amount_added

Whichever of ``amount_added``, ``percentage_added`` or ``base_cost`` was
edited drives the recompute. A ``base_cost`` edit keeps the percentage, so a
cost change re-prices proportionally. With a zero cost the percentage is 0.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from freightquote.coercion import to_non_negative, to_number
from freightquote.pricing.amounts import recompute_amount

if TYPE_CHECKING:
    from freightquote.models.pricing import LineItem


def markup_amount(base_cost: float, percentage: float) -> float:
    return base_cost * percentage / 100


def markup_percentage(base_cost: float, amount: float) -> float:
    """Percentage that *amount* represents of *base_cost*; ``0`` when there is no cost."""
    if base_cost == 0:
        return 0.0
    return amount / base_cost * 100


def _reprice(item: LineItem, base_cost: float, amount_added: float, percentage_added: float) -> LineItem:
    if base_cost == 0:
        # No cost to express a percentage of
        percentage_added = 0.0
    final_price = base_cost + amount_added
    updated = item.model_copy(
        update={
            "base_cost": base_cost,
            "amount_added": amount_added,
            "percentage_added": percentage_added,
            "final_price": final_price,
            "price": final_price,
        }
    )
    return recompute_amount(updated)


def apply_markup_amount(item: LineItem, value: Any) -> LineItem:
    """Set the markup amount and derive the percentage from it."""
    base_cost = item.base_cost or 0.0
    amount = to_number(value)
    return _reprice(item, base_cost, amount, markup_percentage(base_cost, amount))


def apply_markup_percentage(item: LineItem, value: Any) -> LineItem:
    """Set the markup percentage and derive the amount from it."""
    base_cost = item.base_cost or 0.0
    percentage = to_number(value)
    return _reprice(item, base_cost, markup_amount(base_cost, percentage), percentage)


def apply_base_cost(item: LineItem, value: Any) -> LineItem:
    """Set the base cost, keeping the existing markup percentage."""
    base_cost = to_non_negative(value)
    percentage = item.percentage_added or 0.0
    return _reprice(item, base_cost, markup_amount(base_cost, percentage), percentage)
