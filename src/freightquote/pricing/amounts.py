"""
Line totals and the quotation-level financial summary.

A line total is ``unit_price × quantity × forex_rate``, expressed in the
reporting currency. ``is_taxed`` never changes a line total; tax only shows
up in :func:`calculate_financial_summary`.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from freightquote.models.pricing import Category, LineItem

DEFAULT_TAX_RATE = 0.12  # Philippine VAT


def line_amount(item: LineItem) -> float:
    """Line total of *item* in the reporting currency."""
    return item.unit_price * item.quantity * item.forex_rate


def recompute_amount(item: LineItem) -> LineItem:
    """Return a copy of *item* whose ``amount`` matches its inputs."""
    return item.model_copy(update={"amount": line_amount(item)})


def category_subtotal(items: Iterable[LineItem]) -> float:
    return sum(item.amount for item in items)


def total_amount(categories: Iterable[Category]) -> float:
    """Sum of every category subtotal."""
    return sum(cat.subtotal for cat in categories)


def round_money(value: float) -> Decimal:
    """Round to cents, half-up, for display and export."""
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


@dataclass
class FinancialSummary:
    """Taxed / non-taxed split of a quotation with its grand total."""

    subtotal_non_taxed: float = 0.0
    subtotal_taxed: float = 0.0
    tax_rate: float = DEFAULT_TAX_RATE
    tax_amount: float = 0.0
    other_charges: float = 0.0
    grand_total: float = 0.0

    @property
    def subtotal(self) -> float:
        return self.subtotal_non_taxed + self.subtotal_taxed


def calculate_financial_summary(
    categories: Iterable[Category],
    tax_rate: float = DEFAULT_TAX_RATE,
    other_charges: float = 0.0,
) -> FinancialSummary:
    """Split line totals by ``is_taxed``, apply *tax_rate* and add other charges."""
    non_taxed = 0.0
    taxed = 0.0
    for category in categories:
        for item in category.line_items:
            if item.is_taxed:
                taxed += item.amount
            else:
                non_taxed += item.amount

    tax_amount = taxed * tax_rate
    return FinancialSummary(
        subtotal_non_taxed=non_taxed,
        subtotal_taxed=taxed,
        tax_rate=tax_rate,
        tax_amount=tax_amount,
        other_charges=other_charges,
        grand_total=non_taxed + taxed + tax_amount + other_charges,
    )
