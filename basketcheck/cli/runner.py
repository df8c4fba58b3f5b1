# basketcheck/cli/runner.py

"""Headless CLI commands that render engine output with Rich."""

import logging
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from basketcheck.config.settings import Settings
from basketcheck.services.basket_service import BasketService
from basketcheck.storage.basket_store import BasketStore, StoreError
from basketcheck.storage.csv_transfer import import_from_csv, write_csv_export

logger = logging.getLogger("basketcheck.cli")

# Stderr console for status messages so stdout stays clean for reports
_err = Console(stderr=True)


def _open_store(db_path: str | None) -> BasketStore:
    return BasketStore(db_path=Path(db_path) if db_path else None)


def _signed(value: float, suffix: str = "%") -> str:
    colour = "red" if value > 0 else "green" if value < 0 else "white"
    return f"[{colour}]{value:+.2f}{suffix}[/{colour}]"


def _print_summary(service: BasketService, symbol: str) -> None:
    summary = service.summary()
    table = Table(title="Basket Summary", title_style="bold cyan")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    table.add_row("Products tracked", str(summary.product_count))
    table.add_row("Price records", str(summary.record_count))
    table.add_row("Current basket", f"{symbol}{summary.current_cost:,.2f}")
    table.add_row(
        "Last month", f"{symbol}{summary.previous_month_cost:,.2f}",
    )
    table.add_row("Monthly change", _signed(summary.change_percent))
    table.add_row(
        "Avg annual inflation", _signed(summary.average_annual_inflation),
    )
    table.add_row(
        "Trend (per month)", _signed(summary.monthly_growth_rate),
    )
    yoy = summary.year_over_year
    if yoy is not None:
        table.add_row(f"Since {yoy.year_ago_label}", _signed(yoy.change_percent))
    Console().print(table)


def _print_cpi(service: BasketService) -> None:
    series = service.monthly_cpi()
    if not series:
        _err.print(
            "[yellow]Log prices in at least two months to see CPI.[/yellow]"
        )
        return
    table = Table(title="Personal CPI", title_style="bold cyan")
    table.add_column("Month")
    table.add_column("Personal", justify="right")
    table.add_column("Reference", justify="right")
    for point in series:
        table.add_row(
            point.month_label,
            _signed(point.personal_cpi),
            f"{point.reference_cpi:+.2f}%",
        )
    Console().print(table)


def _print_categories(service: BasketService, symbol: str) -> None:
    items = service.category_inflation()
    if not items:
        return
    table = Table(title="Category Inflation", title_style="bold cyan")
    table.add_column("Category", style="magenta")
    table.add_column("Before", justify="right")
    table.add_column("Now", justify="right")
    table.add_column("Change", justify="right")
    for item in items:
        table.add_row(
            item.category,
            f"{symbol}{item.previous_cost:,.2f}",
            f"{symbol}{item.current_cost:,.2f}",
            _signed(item.change_percent),
        )
    Console().print(table)


def _print_anomalies(service: BasketService, symbol: str) -> None:
    anomalies = service.anomalies()
    if not anomalies:
        return
    table = Table(title="Price Changes", title_style="bold cyan")
    table.add_column("Product")
    table.add_column("Was", justify="right")
    table.add_column("Now", justify="right")
    table.add_column("Change", justify="right")
    for a in anomalies:
        table.add_row(
            a.product_name,
            f"{symbol}{a.previous_price:,.2f}",
            f"{symbol}{a.current_price:,.2f}",
            _signed(a.change_percent),
        )
    Console().print(table)


def _print_forecast(
    service: BasketService, symbol: str, months: int,
) -> None:
    points = service.forecast(months)
    table = Table(title="Forecast", title_style="bold cyan")
    table.add_column("Month")
    table.add_column("Projected", justify="right", style="green")
    for p in points:
        table.add_row(p.month_label, f"{symbol}{p.projected_cost:,.2f}")
    Console().print(table)


def _print_purchasing_power(service: BasketService, salary: float) -> None:
    points = service.purchasing_power(salary)
    if not points:
        return
    table = Table(title="Purchasing Power", title_style="bold cyan")
    table.add_column("Month")
    table.add_column("Baskets per salary", justify="right")
    for p in points:
        table.add_row(p.month_label, f"{p.baskets_affordable:,.1f}")
    Console().print(table)


def run_report(db_path: str | None, months: int) -> int:
    """Print every analytics table for the stored basket."""
    store = _open_store(db_path)
    try:
        prefs = store.get_settings()
        service = BasketService(store)
        symbol = prefs.currency_symbol

        _print_summary(service, symbol)
        _print_cpi(service)
        _print_categories(service, symbol)
        _print_anomalies(service, symbol)
        _print_forecast(service, symbol, months)
        _print_purchasing_power(service, prefs.salary)
    finally:
        store.close()
    return 0


def run_add_product(
    db_path: str | None, name: str, category: str, unit: str,
) -> int:
    """Add a product and print its id."""
    store = _open_store(db_path)
    try:
        product = store.add_product(name, category, unit)
    except StoreError as exc:
        logger.error("Add product failed: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1
    finally:
        store.close()
    _err.print(f"[green]✓ Added {product.name}[/green]")
    print(product.id)
    return 0


def run_log_price(
    db_path: str | None,
    product_id: str,
    price: float,
    date: str | None,
) -> int:
    """Log a price for an existing product."""
    store = _open_store(db_path)
    try:
        at = datetime.fromisoformat(date) if date else None
        record = store.log_price(product_id, price, at)
    except (StoreError, ValueError) as exc:
        logger.error("Log price failed: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1
    finally:
        store.close()
    _err.print(
        f"[green]✓ Logged {record.price:,.2f} for "
        f"{record.product_name}[/green]"
    )
    return 0


def run_export_csv(db_path: str | None, output_dir: str | None) -> int:
    """Write a CSV backup of the price history."""
    store = _open_store(db_path)
    try:
        path = write_csv_export(
            store.list_products(),
            store.list_price_records(),
            Path(output_dir) if output_dir else None,
        )
    except OSError as exc:
        logger.error("CSV export failed: %s", exc, exc_info=True)
        _err.print(f"[red]Export failed: {exc}[/red]")
        return 1
    finally:
        store.close()
    _err.print(f"[dim]Saved → {path}[/dim]")
    return 0


def run_import_csv(db_path: str | None, csv_path: str) -> int:
    """Import a CSV backup into the store."""
    try:
        content = Path(csv_path).read_text(encoding="utf-8")
    except OSError as exc:
        logger.error("Cannot read %s: %s", csv_path, exc)
        _err.print(f"[red]Cannot read {csv_path}: {exc}[/red]")
        return 1

    store = _open_store(db_path)
    try:
        result = import_from_csv(content, store)
    finally:
        store.close()

    for message in result.errors:
        _err.print(f"[yellow]{message}[/yellow]")
    _err.print(f"[green]✓ Imported {result.imported} records[/green]")
    return 0 if result.imported else 1


def run_settings(
    db_path: str | None,
    salary: float | None,
    budget: float | None,
    currency: str | None,
) -> int:
    """Update salary, budget or currency, then print the stored values."""
    changes: dict[str, object] = {}
    if salary is not None:
        changes["salary"] = salary
    if budget is not None:
        changes["budget"] = budget
    if currency is not None:
        changes["currency"] = currency

    store = _open_store(db_path)
    try:
        prefs = (
            store.update_settings(**changes) if changes
            else store.get_settings()
        )
    except StoreError as exc:
        logger.error("Settings update failed: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1
    finally:
        store.close()

    table = Table(title="Settings", title_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value", justify="right")
    table.add_row("Currency", f"{prefs.currency} ({prefs.currency_symbol})")
    table.add_row("Salary", f"{prefs.currency_symbol}{prefs.salary:,.2f}")
    table.add_row("Budget", f"{prefs.currency_symbol}{prefs.budget:,.2f}")
    Console().print(table)
    return 0


def run_sample_data(db_path: str | None) -> int:
    """Seed the store with the demo basket."""
    store = _open_store(db_path)
    try:
        count = store.load_sample_data()
    finally:
        store.close()
    if not count:
        _err.print("[yellow]Sample products already present.[/yellow]")
        return 0
    _err.print(f"[green]✓ Loaded {count} sample price records[/green]")
    return 0


def run_chart(
    db_path: str | None,
    kind: str,
    open_browser: bool,
    product_id: str | None = None,
) -> int:
    """Export a CPI, forecast or single-product history chart as HTML."""
    from basketcheck.storage.chart_exporter import (
        export_cpi_chart,
        export_forecast_chart,
        export_price_history_chart,
    )

    store = _open_store(db_path)
    try:
        service = BasketService(store)
        if kind == "cpi":
            path = export_cpi_chart(
                service.monthly_cpi(), open_browser=open_browser,
            )
        elif kind == "history":
            if not product_id:
                _err.print("[red]A product id is required for history.[/red]")
                return 1
            product = store.get_product(product_id)
            path = export_price_history_chart(
                product.name,
                service.price_history(product.id),
                open_browser=open_browser,
            )
        else:
            path = export_forecast_chart(
                service.forecast(Settings.FORECAST_MONTHS),
                currency_symbol=store.get_settings().currency_symbol,
                open_browser=open_browser,
            )
    except StoreError as exc:
        logger.error("Chart export failed: %s", exc)
        _err.print(f"[red]{exc}[/red]")
        return 1
    finally:
        store.close()

    if path is None:
        _err.print("[yellow]Not enough data for a chart yet.[/yellow]")
        return 1
    _err.print(f"[dim]Chart saved → {path}[/dim]")
    return 0
