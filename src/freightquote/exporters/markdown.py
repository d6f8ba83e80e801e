"""
Markdown quotation exporter.

Generates a Markdown breakdown of a quotation: the buying price grouped by
vendor and category, the selling price by category, and the financial
summary. Suitable for pasting into an email or a ticket.
"""

from __future__ import annotations

from freightquote.models.pricing import Category, Quotation
from freightquote.pricing.amounts import DEFAULT_TAX_RATE, calculate_financial_summary, round_money
from freightquote.pricing.grouping import group_by_vendor


def _money(value: float, currency: str) -> str:
    return f"{currency} {round_money(value):,.2f}"


def render_markdown(
    quotation: Quotation,
    reporting_currency: str = "PHP",
    default_tax_rate: float = DEFAULT_TAX_RATE,
) -> str:
    """Render a quotation breakdown as Markdown.

    *default_tax_rate* applies when the quotation carries no tax rate.
    """
    lines: list[str] = []

    # Header
    lines.append(f"# Quotation {quotation.title}")
    lines.append("")
    if quotation.customer_name:
        lines.append(f"*Customer: {quotation.customer_name}*")
        lines.append("")

    # Buying price by vendor
    groups = group_by_vendor(quotation.buying_price, quotation.vendors)
    if groups:
        lines.append("## Buying Price")
        lines.append("")
        for group in groups:
            lines.append(f"### {group.vendor_name} ({group.vendor_service})")
            lines.append("")
            for cat in group.categories:
                lines.append(f"#### {cat.category_name}")
                lines.append("")
                lines.append("| Description | Qty | Price | Forex | Amount |")
                lines.append("|-------------|-----|-------|-------|--------|")
                for item in cat.line_items:
                    lines.append(
                        f"| {item.description or '-'} | {item.quantity:g} | "
                        f"{_money(item.unit_price, item.currency)} | {item.forex_rate:g} | "
                        f"{_money(item.amount, reporting_currency)} |"
                    )
                lines.append(f"| **Subtotal** | | | | **{_money(cat.subtotal, reporting_currency)}** |")
                lines.append("")
            lines.append(f"**{group.vendor_name} total:** {_money(group.subtotal, reporting_currency)}")
            lines.append("")

    # Selling price by category
    if quotation.selling_price:
        lines.append("## Selling Price")
        lines.append("")
        for cat in quotation.selling_price:
            lines.extend(_selling_table(cat, reporting_currency))

    # Financial summary
    summary = calculate_financial_summary(
        quotation.selling_price or quotation.buying_price,
        tax_rate=quotation.tax_rate if quotation.tax_rate is not None else default_tax_rate,
        other_charges=quotation.other_charges,
    )
    lines.append("## Summary")
    lines.append("")
    lines.append("| | Amount |")
    lines.append("|--|--------|")
    lines.append(f"| Non-taxed subtotal | {_money(summary.subtotal_non_taxed, reporting_currency)} |")
    lines.append(f"| Taxed subtotal | {_money(summary.subtotal_taxed, reporting_currency)} |")
    lines.append(f"| Tax ({summary.tax_rate:.0%}) | {_money(summary.tax_amount, reporting_currency)} |")
    if summary.other_charges:
        lines.append(f"| Other charges | {_money(summary.other_charges, reporting_currency)} |")
    lines.append(f"| **Grand total** | **{_money(summary.grand_total, reporting_currency)}** |")
    lines.append("")

    return "\n".join(lines)


def _selling_table(category: Category, reporting_currency: str) -> list[str]:
    lines = [f"### {category.name or 'Unnamed Category'}", ""]
    lines.append("| Description | Qty | Base cost | Markup | Final price | Amount |")
    lines.append("|-------------|-----|-----------|--------|-------------|--------|")
    for item in category.line_items:
        markup = f"{item.percentage_added or 0:g}%" if item.is_selling else "-"
        base_cost = _money(item.base_cost, item.currency) if item.base_cost is not None else "-"
        lines.append(
            f"| {item.description or '-'} | {item.quantity:g} | {base_cost} | {markup} | "
            f"{_money(item.unit_price, item.currency)} | {_money(item.amount, reporting_currency)} |"
        )
    lines.append(f"| **Subtotal** | | | | | **{_money(category.subtotal, reporting_currency)}** |")
    lines.append("")
    return lines
