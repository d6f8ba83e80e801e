"""
Quotation workspace — owns the pricing state of one quotation being edited.

The workspace holds the buying and selling price sections plus the
expand/collapse state of each vendor view. Every edit replaces the affected
category list; vendor groups are recomputed on each read.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from freightquote.config import FreightQuoteConfig
from freightquote.models.pricing import Category, Quotation
from freightquote.pricing import amounts, categories as ops
from freightquote.pricing.expansion import (
    ExpansionState,
    reconcile_new_vendors,
    toggle_category,
    toggle_vendor,
)
from freightquote.pricing.grouping import CategoryKey, VendorGroup, VendorKey, group_by_vendor
from freightquote.pricing.line_items import LineItemField

logger = logging.getLogger("freightquote.workspace")


class QuotationLoadError(Exception):
    """A quotation file could not be read, parsed or validated."""


class PriceSide(str, Enum):
    """The two price sections of a quotation."""

    BUYING = "buying"
    SELLING = "selling"

    @property
    def attribute(self) -> str:
        return f"{self.value}_price"


def load_quotation(path: str | Path) -> Quotation:
    """Read a quotation from a ``.json``, ``.yaml`` or ``.yml`` file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise QuotationLoadError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(text) if path.suffix.lower() == ".json" else yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise QuotationLoadError(f"Cannot parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise QuotationLoadError(f"{path} does not contain a quotation mapping")

    try:
        quotation = Quotation.model_validate(data)
    except ValidationError as e:
        raise QuotationLoadError(f"Invalid quotation in {path}: {e}") from e

    logger.info(
        "Loaded quotation %s: %d buying, %d selling categories",
        quotation.title,
        len(quotation.buying_price),
        len(quotation.selling_price),
    )
    return quotation


@dataclass
class QuotationWorkspace:
    """Editing session for a single quotation.

    Usage::

        ws = QuotationWorkspace.from_file("IQ25120034.yaml")
        ws.edit_item(PriceSide.SELLING, cat_id, item_id, "percentage_added", 15)
        for group in ws.vendor_groups(PriceSide.BUYING):
            ...
    """

    quotation: Quotation
    config: FreightQuoteConfig = field(default_factory=FreightQuoteConfig)
    expansion: dict[PriceSide, ExpansionState] = field(
        default_factory=lambda: {side: ExpansionState() for side in PriceSide}
    )

    def __post_init__(self) -> None:
        for side in PriceSide:
            self._reconcile(side)

    @classmethod
    def from_file(cls, path: str | Path, config: FreightQuoteConfig | None = None) -> QuotationWorkspace:
        return cls(quotation=load_quotation(path), config=config or FreightQuoteConfig())

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def categories(self, side: PriceSide) -> list[Category]:
        return getattr(self.quotation, side.attribute)

    def vendor_groups(self, side: PriceSide = PriceSide.BUYING) -> list[VendorGroup]:
        return group_by_vendor(self.categories(side), self.quotation.vendors)

    @property
    def tax_rate(self) -> float:
        if self.quotation.tax_rate is not None:
            return self.quotation.tax_rate
        return self.config.tax_rate

    def total(self, side: PriceSide) -> float:
        return amounts.total_amount(self.categories(side))

    def financial_summary(self) -> amounts.FinancialSummary:
        """Summary of the selling price, or the buying price while no selling price exists.

        The quotation's own tax rate wins over the configured one.
        """
        source = self.quotation.selling_price or self.quotation.buying_price
        return amounts.calculate_financial_summary(
            source,
            tax_rate=self.tax_rate,
            other_charges=self.quotation.other_charges,
        )

    # ------------------------------------------------------------------
    # Line item edits
    # ------------------------------------------------------------------

    def edit_item(
        self,
        side: PriceSide,
        category_id: str,
        item_id: str,
        field_name: LineItemField | str,
        value: Any,
    ) -> None:
        self._replace(side, ops.update_line_item(self.categories(side), category_id, item_id, field_name, value))

    def remove_item(self, side: PriceSide, category_id: str, item_id: str) -> None:
        self._replace(
            side,
            ops.remove_line_item(
                self.categories(side),
                category_id,
                item_id,
                prune_empty=self.config.prune_empty_categories,
            ),
        )

    def add_item(self, side: PriceSide, category_id: str, service: str = "") -> None:
        self._replace(
            side,
            ops.add_line_item(
                self.categories(side),
                category_id,
                selling=side is PriceSide.SELLING,
                currency=self.config.default_currency,
                service=service,
            ),
        )

    # ------------------------------------------------------------------
    # Category lifecycle
    # ------------------------------------------------------------------

    def add_category(self, side: PriceSide, name: str | None = None) -> None:
        self._replace(
            side,
            ops.add_category(
                self.categories(side),
                name or self.config.default_category_name,
                unique_names=self._unique_names(side),
            ),
        )

    def rename_category(self, side: PriceSide, category_id: str, new_name: str) -> None:
        self._replace(
            side,
            ops.rename_category(
                self.categories(side), category_id, new_name, unique_names=self._unique_names(side)
            ),
        )

    def duplicate_category(self, side: PriceSide, category_id: str) -> None:
        self._replace(
            side,
            ops.duplicate_category(self.categories(side), category_id, unique_names=self._unique_names(side)),
        )

    def delete_category(self, side: PriceSide, category_id: str) -> None:
        self._replace(side, ops.delete_category(self.categories(side), category_id))

    def import_vendor_charges(self, charges: list[Category]) -> None:
        """Add vendor charges to the buying price and, at zero markup, to the selling price.

        Buying categories stay separate per vendor; selling categories merge
        by name.
        """
        if not charges:
            logger.warning("No vendor charges to import")
            return
        self._replace(PriceSide.BUYING, [*self.quotation.buying_price, *charges])
        self._replace(
            PriceSide.SELLING,
            ops.merge_categories(self.quotation.selling_price, ops.to_selling_categories(charges)),
        )

    # ------------------------------------------------------------------
    # Expand / collapse
    # ------------------------------------------------------------------

    def toggle_vendor(self, side: PriceSide, key: VendorKey) -> None:
        self.expansion[side] = toggle_vendor(self.expansion[side], key, self.vendor_groups(side))

    def toggle_category(self, side: PriceSide, key: CategoryKey) -> None:
        self.expansion[side] = toggle_category(self.expansion[side], key)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _unique_names(self, side: PriceSide) -> bool:
        return side is PriceSide.SELLING and self.config.unique_selling_category_names

    def _replace(self, side: PriceSide, categories: list[Category]) -> None:
        self.quotation = self.quotation.model_copy(update={side.attribute: categories})
        self._reconcile(side)

    def _reconcile(self, side: PriceSide) -> None:
        self.expansion[side] = reconcile_new_vendors(self.expansion[side], self.vendor_groups(side))
