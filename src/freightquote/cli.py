"""
freightquote CLI — inspect quotation files from the command line.

Usage:
    freightquote group quotation.yaml --side buying
    freightquote summary quotation.yaml
    fq export quotation.json --output breakdown.md
"""

from __future__ import annotations

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from freightquote import __version__

app = typer.Typer(
    name="freightquote",
    help="Freight quotation pricing: markups, totals and vendor breakdowns",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]freightquote[/bold] v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """freightquote — quotation pricing and vendor breakdowns."""


def _open_workspace(path: str, config: str | None):  # noqa: ANN202
    from freightquote.config import FreightQuoteConfig
    from freightquote.workspace import QuotationLoadError, QuotationWorkspace

    settings = FreightQuoteConfig.load(config)
    logging.basicConfig(level=getattr(logging, settings.log_level, logging.WARNING))

    try:
        return QuotationWorkspace.from_file(path, config=settings)
    except QuotationLoadError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from e


@app.command()
def group(
    path: str = typer.Argument(..., help="Quotation file (.yaml, .yml or .json)"),
    side: str = typer.Option(
        "buying",
        "--side",
        "-s",
        help="Price section to group: buying or selling",
    ),
    config: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show line items grouped by vendor, then by category."""
    from freightquote.workspace import PriceSide

    try:
        price_side = PriceSide(side.lower())
    except ValueError:
        console.print(f"[red]Error: unknown side {side!r}; use buying or selling[/red]")
        raise typer.Exit(1)

    ws = _open_workspace(path, config)
    currency = ws.config.reporting_currency
    groups = ws.vendor_groups(price_side)

    if not groups:
        console.print(f"[dim]No {price_side.value} price line items.[/dim]")
        return

    tree = Tree(f"[bold]{ws.quotation.title}[/bold] ({price_side.value} price)")
    for vendor in groups:
        count = f"{vendor.item_count} item{'s' if vendor.item_count != 1 else ''}"
        branch = tree.add(
            f"[bold cyan]{vendor.vendor_name}[/bold cyan] [dim]({vendor.vendor_service}, {count})[/dim] "
            f"{currency} {vendor.subtotal:,.2f}"
        )
        for cat in vendor.categories:
            leaf = branch.add(f"[bold]{cat.category_name}[/bold] {currency} {cat.subtotal:,.2f}")
            for item in cat.line_items:
                leaf.add(
                    f"{item.description or '-'}: {item.quantity:g} × {item.currency} {item.unit_price:,.2f}"
                    f" × {item.forex_rate:g} = {currency} {item.amount:,.2f}"
                )
    console.print(tree)
    console.print(f"\n[bold]Total:[/bold] {currency} {ws.total(price_side):,.2f}")


@app.command()
def summary(
    path: str = typer.Argument(..., help="Quotation file (.yaml, .yml or .json)"),
    config: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Show the taxed / non-taxed split and the grand total."""
    from freightquote.workspace import PriceSide

    ws = _open_workspace(path, config)
    currency = ws.config.reporting_currency
    result = ws.financial_summary()

    console.print(Panel.fit(
        f"[bold blue]Quotation {ws.quotation.title}[/bold blue]",
        subtitle=f"v{__version__}",
    ))

    table = Table(title="Financial Summary", show_lines=True)
    table.add_column("Line", style="bold")
    table.add_column(f"Amount ({currency})", justify="right")

    table.add_row("Buying total", f"{ws.total(PriceSide.BUYING):,.2f}")
    table.add_row("Selling total", f"{ws.total(PriceSide.SELLING):,.2f}")
    table.add_row("Non-taxed subtotal", f"{result.subtotal_non_taxed:,.2f}")
    table.add_row("Taxed subtotal", f"{result.subtotal_taxed:,.2f}")
    table.add_row(f"Tax ({result.tax_rate:.0%})", f"{result.tax_amount:,.2f}")
    if result.other_charges:
        table.add_row("Other charges", f"{result.other_charges:,.2f}")
    table.add_row("Grand total", f"[bold]{result.grand_total:,.2f}[/bold]")

    console.print(table)


@app.command()
def export(
    path: str = typer.Argument(..., help="Quotation file (.yaml, .yml or .json)"),
    output: str = typer.Option(
        "quotation.md",
        "--output",
        "-o",
        help="Output Markdown file",
    ),
    config: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file",
    ),
) -> None:
    """Write a Markdown breakdown of the quotation."""
    from freightquote.exporters.markdown import render_markdown

    ws = _open_workspace(path, config)
    out = Path(output)
    out.write_text(
        render_markdown(
            ws.quotation,
            reporting_currency=ws.config.reporting_currency,
            default_tax_rate=ws.config.tax_rate,
        )
    )
    console.print(f"[green]✓[/green] Breakdown saved to [bold]{out}[/bold]")


if __name__ == "__main__":
    app()
