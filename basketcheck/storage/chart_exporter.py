# basketcheck/storage/chart_exporter.py

"""Generate interactive Plotly HTML charts from engine output."""

import importlib
import logging
import webbrowser
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from types import ModuleType
from typing import Any

from basketcheck.config.settings import Settings
from basketcheck.models.analytics import (
    CPIDataPoint,
    ForecastPoint,
    PriceHistoryPoint,
)

logger = logging.getLogger("basketcheck.chart")

_CHARTS_DIR: Path = Settings.DATA_DIR / "charts"


def _get_plotly_go() -> ModuleType:
    """Import plotly.graph_objects lazily."""
    return importlib.import_module("plotly.graph_objects")


def _ensure_charts_dir() -> Path:
    """Create charts directory if it doesn't exist."""
    _CHARTS_DIR.mkdir(parents=True, exist_ok=True)
    return _CHARTS_DIR


def _write_chart(fig: Any, stem: str, open_browser: bool) -> Path:
    """Write *fig* to a timestamped HTML file and optionally open it."""
    charts_dir = _ensure_charts_dir()
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    filepath = charts_dir / f"{stem}_{stamp}.html"
    fig.write_html(str(filepath))
    logger.info("Chart saved to %s", filepath)

    if open_browser:
        webbrowser.open(filepath.as_uri())

    return filepath


def export_cpi_chart(
    series: Sequence[CPIDataPoint],
    open_browser: bool = True,
) -> Path | None:
    """Plot personal CPI against the reference CPI."""
    if len(series) < 2:
        logger.warning("Not enough CPI points for chart: %d", len(series))
        return None

    go = _get_plotly_go()
    dates = [p.date for p in series]

    fig: Any = go.Figure()
    fig.add_trace(go.Scatter(
        x=dates,
        y=[p.personal_cpi for p in series],
        mode="lines+markers",
        name="Personal CPI",
        hovertemplate="%{x|%b %Y}<br>%{y:.2f}%<extra></extra>",
    ))
    fig.add_trace(go.Scatter(
        x=dates,
        y=[p.reference_cpi for p in series],
        mode="lines",
        name="Reference CPI",
        line={"dash": "dash"},
        hovertemplate="%{x|%b %Y}<br>%{y:.2f}%<extra></extra>",
    ))
    fig.update_layout(
        title="Personal Inflation vs Reference",
        xaxis_title="Month",
        yaxis_title="Cumulative change (%)",
        hovermode="x unified",
        template="plotly_white",
        legend={"orientation": "h", "y": -0.15},
    )
    return _write_chart(fig, "cpi", open_browser)


def export_forecast_chart(
    points: Sequence[ForecastPoint],
    currency_symbol: str = "$",
    open_browser: bool = True,
) -> Path | None:
    """Plot projected basket cost over the forecast horizon."""
    if len(points) < 2:
        logger.warning("Not enough forecast points for chart")
        return None

    go = _get_plotly_go()
    fig: Any = go.Figure()
    fig.add_trace(go.Scatter(
        x=[p.date for p in points],
        y=[p.projected_cost for p in points],
        mode="lines+markers",
        name="Projected basket",
        hovertemplate=(
            "%{x|%b %Y}<br>"
            f"Cost: {currency_symbol}%{{y:.2f}}"
            "<extra></extra>"
        ),
    ))
    fig.update_layout(
        title="Basket Cost Forecast",
        xaxis_title="Month",
        yaxis_title=f"Basket cost ({currency_symbol})",
        hovermode="x unified",
        template="plotly_white",
    )
    return _write_chart(fig, "forecast", open_browser)


def export_price_history_chart(
    product_name: str,
    points: Sequence[PriceHistoryPoint],
    open_browser: bool = True,
) -> Path | None:
    """Plot one product's logged prices with min/max annotations."""
    if len(points) < 2:
        logger.warning(
            "Not enough data points for chart: %s", product_name[:60],
        )
        return None

    go = _get_plotly_go()
    dates = [p.date for p in points]
    prices = [p.price for p in points]

    fig: Any = go.Figure()
    fig.add_trace(go.Scatter(
        x=dates,
        y=prices,
        mode="lines+markers",
        name=product_name[:50],
        hovertemplate=(
            "%{x|%Y-%m-%d}<br>"
            "Price: %{y:.2f}"
            "<extra></extra>"
        ),
    ))

    min_price = min(prices)
    max_price = max(prices)
    fig.add_annotation(
        x=dates[prices.index(min_price)], y=min_price,
        text=f"Min: {min_price:.2f}",
        showarrow=True, arrowhead=2,
    )
    fig.add_annotation(
        x=dates[prices.index(max_price)], y=max_price,
        text=f"Max: {max_price:.2f}",
        showarrow=True, arrowhead=2,
    )
    fig.update_layout(
        title=f"Price History: {product_name[:60]}",
        xaxis_title="Date",
        yaxis_title="Price",
        hovermode="x unified",
        template="plotly_white",
    )

    slug = product_name[:30].replace(" ", "_").replace("/", "_")
    return _write_chart(fig, slug, open_browser)
