"""
freightquote pricing engine — pure computation modules.

Line item edits, markup sync, line totals, category operations, vendor
grouping and expand/collapse state. Nothing here performs I/O.
"""

from freightquote.pricing.amounts import (
    FinancialSummary,
    calculate_financial_summary,
    line_amount,
    recompute_amount,
    round_money,
    total_amount,
)
from freightquote.pricing.categories import (
    add_category,
    add_line_item,
    delete_category,
    duplicate_category,
    merge_categories,
    new_line_item,
    remove_line_item,
    rename_category,
    to_selling_categories,
    update_line_item,
)
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
from freightquote.pricing.grouping import (
    CategoryGroup,
    CategoryKey,
    VendorGroup,
    VendorKey,
    group_by_vendor,
)
from freightquote.pricing.line_items import LineItemField, apply_field_edit
from freightquote.pricing.markup import apply_base_cost, apply_markup_amount, apply_markup_percentage

__all__ = [
    # Line items and markup
    "LineItemField",
    "apply_field_edit",
    "apply_base_cost",
    "apply_markup_amount",
    "apply_markup_percentage",
    # Amounts
    "FinancialSummary",
    "calculate_financial_summary",
    "line_amount",
    "recompute_amount",
    "round_money",
    "total_amount",
    # Categories
    "add_category",
    "add_line_item",
    "delete_category",
    "duplicate_category",
    "merge_categories",
    "new_line_item",
    "remove_line_item",
    "rename_category",
    "to_selling_categories",
    "update_line_item",
    # Grouping
    "CategoryGroup",
    "CategoryKey",
    "VendorGroup",
    "VendorKey",
    "group_by_vendor",
    # Expansion
    "ExpansionState",
    "collapse_all",
    "collapse_vendor",
    "expand_all",
    "expand_vendor",
    "reconcile_new_vendors",
    "toggle_category",
    "toggle_vendor",
]
