"""
freightquote — pricing engine for freight-forwarding quotations.

Keeps line item markups and totals consistent and derives the
vendor → category → line item view of a quotation's price sections.
"""

__version__ = "0.3.0"
__all__ = ["QuotationWorkspace"]

from freightquote.workspace import QuotationWorkspace  # noqa: E402
