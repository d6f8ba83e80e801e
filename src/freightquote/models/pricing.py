"""
Pricing data models: line items, charge categories, vendors, quotations.

These are the persisted shapes. Derived views (vendor groups) live in
:mod:`freightquote.pricing.grouping` and are never stored.
"""

from __future__ import annotations

import uuid
from typing import Any

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

from freightquote.coercion import to_flag, to_non_negative, to_number


def generate_line_item_id() -> str:
    return f"line-{uuid.uuid4().hex[:12]}"


def generate_category_id() -> str:
    return f"cat-{uuid.uuid4().hex[:12]}"


class LineItem(BaseModel):
    """A single priced charge on a quotation.

    Buying-price items carry a flat ``price``. Selling-price items also carry
    ``base_cost`` and the markup pair; for those ``final_price`` is the
    charged unit price and ``price`` mirrors it.
    """

    id: str = Field(default_factory=generate_line_item_id)
    description: str = ""
    unit: str = ""
    quantity: float = 1.0
    price: float = 0.0
    currency: str = "PHP"
    forex_rate: float = 1.0
    is_taxed: bool = False
    remarks: str = ""
    amount: float = 0.0
    service: str = Field(default="", validation_alias=AliasChoices("service", "service_tag"))
    vendor_id: str | None = None

    # Selling-price markup fields
    base_cost: float | None = None
    amount_added: float | None = None
    percentage_added: float | None = None
    final_price: float | None = None

    @field_validator("quantity", "price", "forex_rate", mode="before")
    @classmethod
    def _coerce_physical(cls, value: Any) -> float:
        return to_non_negative(value)

    @field_validator("base_cost", "final_price", mode="before")
    @classmethod
    def _coerce_optional_physical(cls, value: Any) -> float | None:
        return None if value is None else to_non_negative(value)

    @field_validator("amount_added", "percentage_added", mode="before")
    @classmethod
    def _coerce_markup(cls, value: Any) -> float | None:
        # Negative markup is a discount
        return None if value is None else to_number(value)

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return to_number(value)

    @field_validator("is_taxed", mode="before")
    @classmethod
    def _coerce_flag(cls, value: Any) -> bool:
        return to_flag(value)

    @field_validator("description", "unit", "remarks", "service", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("vendor_id", mode="before")
    @classmethod
    def _blank_vendor(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    @model_validator(mode="after")
    def _derive_totals(self) -> LineItem:
        from freightquote.pricing.amounts import line_amount
        from freightquote.pricing.markup import markup_amount, markup_percentage

        if self.base_cost is not None:
            if self.base_cost == 0:
                # A flat markup on a free item has no percentage to derive it from
                self.amount_added = self.amount_added or 0.0
                self.percentage_added = 0.0
            elif self.percentage_added is not None or self.amount_added is None:
                self.percentage_added = self.percentage_added or 0.0
                self.amount_added = markup_amount(self.base_cost, self.percentage_added)
            else:
                self.percentage_added = markup_percentage(self.base_cost, self.amount_added)
            self.final_price = self.base_cost + self.amount_added
            self.price = self.final_price
        self.amount = line_amount(self)
        return self

    @property
    def is_selling(self) -> bool:
        return self.base_cost is not None

    @property
    def unit_price(self) -> float:
        """Price per unit in ``currency``: ``final_price`` when set, else ``price``."""
        return self.final_price if self.final_price is not None else self.price


class Category(BaseModel):
    """A named bucket of line items, e.g. "Origin Local Charges"."""

    id: str = Field(default_factory=generate_category_id)
    name: str = Field(default="", validation_alias=AliasChoices("name", "category_name"))
    line_items: list[LineItem] = Field(default_factory=list)
    subtotal: float = 0.0

    @model_validator(mode="after")
    def _derive_subtotal(self) -> Category:
        self.subtotal = sum(item.amount for item in self.line_items)
        return self

    @property
    def is_empty(self) -> bool:
        return not self.line_items


class Vendor(BaseModel):
    """A row of the vendor directory, used only as a lookup table.

    ``vendor_id`` is the directory's vendor identifier that line items refer
    to; ``id`` is the directory's own record id and is not used for matching.
    """

    id: str | None = None
    vendor_id: str
    name: str = Field(validation_alias=AliasChoices("name", "display_name"))
    service_tag: str = ""
    type: str | None = None  # International Partners, Local Partners, Subcontractors

    @field_validator("service_tag", mode="before")
    @classmethod
    def _blank_service(cls, value: Any) -> str:
        return "" if value is None else str(value)


class Quotation(BaseModel):
    """A quotation document with its buying and selling price sections."""

    id: str | None = None
    quote_number: str = ""
    quotation_name: str | None = None
    customer_name: str = ""
    currency: str = "PHP"
    buying_price: list[Category] = Field(default_factory=list)
    selling_price: list[Category] = Field(default_factory=list)
    vendors: list[Vendor] = Field(default_factory=list)
    tax_rate: float | None = Field(default=None, ge=0.0, le=1.0)  # None: use the configured rate
    other_charges: float = 0.0

    @property
    def title(self) -> str:
        return self.quotation_name or self.quote_number or self.id or "Untitled quotation"
