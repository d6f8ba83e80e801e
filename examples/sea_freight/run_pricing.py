"""
Example: Reprice a sea freight quotation.

Run:
    python examples/sea_freight/run_pricing.py

Or via CLI:
    freightquote group examples/sea_freight/quotation.yaml --side selling
    freightquote summary examples/sea_freight/quotation.yaml
"""

from pathlib import Path

# Get the directory where this script lives
SCRIPT_DIR = Path(__file__).parent.resolve()
QUOTATION_PATH = SCRIPT_DIR / "quotation.yaml"

from freightquote import QuotationWorkspace
from freightquote.models.pricing import Category, LineItem
from freightquote.workspace import PriceSide


def main() -> None:
    ws = QuotationWorkspace.from_file(QUOTATION_PATH)

    # Raise the ocean freight markup to 20%
    ws.edit_item(PriceSide.SELLING, "s-freight", "s1", "percentage_added", 20)

    # Bring in a trucking quote at zero markup
    ws.import_vendor_charges([
        Category(
            name="Destination Charges",
            line_items=[LineItem(description="Trucking to Laguna", price=9500, vendor_id="V-TRUCK")],
        )
    ])

    for group in ws.vendor_groups(PriceSide.BUYING):
        print(f"{group.vendor_name} ({group.vendor_service}): PHP {group.subtotal:,.2f}")
        for cat in group.categories:
            print(f"    {cat.category_name}: PHP {cat.subtotal:,.2f}")

    summary = ws.financial_summary()
    print()
    print(f"Buying total:  PHP {ws.total(PriceSide.BUYING):,.2f}")
    print(f"Selling total: PHP {ws.total(PriceSide.SELLING):,.2f}")
    print(f"Tax:           PHP {summary.tax_amount:,.2f}")
    print(f"Grand total:   PHP {summary.grand_total:,.2f}")


if __name__ == "__main__":
    main()
