"""Chart rendering for the Phillips curve study.

Thin matplotlib wrappers: every function reads a finished table, returns a
Figure and never modifies its input. Colors come from the explicit
AnalysisSettings palette. Use save_figure() to write a PNG and release the
figure.
"""

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from src.analysis.expectations import SCENARIO_PREFIX, scenario_betas
from src.analysis.periods import group_by_decade, select_period
from src.analysis.regression import FittedModel, fit_nonlinear, fit_ols
from src.shared.config import AnalysisSettings
from src.shared.exceptions import InsufficientData
from src.shared.utils import setup_logger

logger = setup_logger(__name__)

SOURCES_FRED = "Sources: FI Consulting, Federal Reserve Bank of St. Louis"
SOURCES_BLS = "Sources: FI Consulting, Federal Reserve Bank of St. Louis, BLS"
SOURCES_CLEVELAND = (
    "Sources: FI Consulting, Federal Reserve Bank of St. Louis, "
    "Federal Reserve Bank of Cleveland"
)

_PERCENT = FuncFormatter(lambda value, _: f"{value:g}%")


def _style(
    ax,
    title: str,
    subtitle: str,
    xlabel: str,
    ylabel: str,
    caption: str | None = None,
    percent_x: bool = False,
) -> None:
    ax.set_title(f"{title}\n{subtitle}" if subtitle else title, loc="center")
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.yaxis.set_major_formatter(_PERCENT)
    if percent_x:
        ax.xaxis.set_major_formatter(_PERCENT)
    for side in ("top", "right"):
        ax.spines[side].set_visible(False)
    ax.grid(alpha=0.3)
    if caption:
        ax.annotate(
            caption,
            xy=(1.0, -0.2),
            xycoords="axes fraction",
            ha="right",
            va="top",
            fontsize=7,
            color="#555555",
        )


def _period_subtitle(period: tuple[int, int]) -> str:
    return f"From {period[0]} to {period[1]}"


def _draw_fit(ax, model: FittedModel, x: pd.Series, color: str, label: str | None = None) -> None:
    grid = np.linspace(float(x.min()), float(x.max()), 100)
    ax.plot(grid, model.predict(grid), color=color, linewidth=1.5, label=label)


def plot_rates_over_time(
    table: pd.DataFrame,
    settings: AnalysisSettings,
    period: tuple[int, int] = (1948, 2017),
) -> Figure:
    """Inflation and U3 unemployment on a shared time axis."""
    data = select_period(table, *period)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(data["date"], data["inflation"], color=settings.palette[0], label="Inflation")
    ax.plot(data["date"], data["u3"], color=settings.palette[1], label="Unemployment")
    ax.legend(title="Rates")
    _style(
        ax,
        "Inflation and Unemployment Rates Over Time",
        f"{period[0]}-{period[1]}",
        "Year",
        "Rate",
        SOURCES_FRED,
    )
    fig.autofmt_xdate(rotation=90)
    return fig


def plot_series(
    table: pd.DataFrame,
    column: str,
    settings: AnalysisSettings,
    title: str,
    ylabel: str,
    period: tuple[int, int] = (1948, 2017),
    caption: str = SOURCES_FRED,
    points: bool = False,
) -> Figure:
    """One rate over time (inflation, u3, nrou or u6)."""
    data = select_period(table, *period)

    fig, ax = plt.subplots(figsize=(10, 5))
    if points:
        ax.scatter(data["date"], data[column], s=8, color=settings.palette[0])
    else:
        ax.plot(data["date"], data[column], color=settings.palette[0])
    _style(ax, title, _period_subtitle(period), "Year", ylabel, caption)
    fig.autofmt_xdate(rotation=90)
    return fig


def plot_decades(
    table: pd.DataFrame,
    column: str,
    settings: AnalysisSettings,
    title: str,
    ylabel: str,
) -> Figure:
    """One panel per decade of a single rate."""
    decades = group_by_decade(table)
    n_panels = max(len(decades), 1)
    ncols = 2
    nrows = (n_panels + ncols - 1) // ncols

    fig, axes = plt.subplots(nrows, ncols, figsize=(12, 3.5 * nrows), squeeze=False)
    flat = axes.flatten()
    for ax, (decade, data) in zip(flat, decades.items()):
        ax.plot(data["date"], data[column], color=settings.palette[0])
        _style(ax, title, f"{decade}s", "Year", ylabel)
        ax.tick_params(axis="x", labelrotation=90)
    for ax in flat[len(decades):]:
        ax.set_visible(False)

    fig.suptitle(f"{title} by Decade")
    fig.tight_layout()
    return fig


def plot_phillips_curve(
    table: pd.DataFrame,
    settings: AnalysisSettings,
    regressor: str = "u3",
    period: tuple[int, int] = (1949, 2017),
    title: str = "Phillips Curve",
    xlabel: str = "Unemployment Rate (U3)",
    caption: str = SOURCES_FRED,
) -> Figure:
    """Inflation against an unemployment measure with a quadratic OLS fit."""
    data = select_period(table, *period)

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(data[regressor], data["inflation"], s=10, color=settings.palette[0])
    try:
        model = fit_nonlinear(data, regressor=regressor)
        _draw_fit(ax, model, data[regressor], settings.palette[1])
    except InsufficientData as e:
        logger.warning("No fit line for %s: %s", title, e)

    _style(ax, title, _period_subtitle(period), xlabel, "Inflation", caption, percent_x=True)
    return fig


def plot_expected_inflation(
    table: pd.DataFrame,
    settings: AnalysisSettings,
    betas: dict[str, float] | None = None,
    period: tuple[int, int] = (1949, 2017),
) -> Figure:
    """Expected-inflation scenarios against the natural rate, one fit per beta.

    `table` must already carry the infl_exp_<name> columns.
    """
    named = scenario_betas(betas if betas is not None else dict(settings.betas))
    data = select_period(table, *period)

    fig, ax = plt.subplots(figsize=(8, 6))
    for i, (name, beta) in enumerate(named.items()):
        column = f"{SCENARIO_PREFIX}{name}"
        color = settings.palette[i % len(settings.palette)]
        ax.scatter(data["nrou"], data[column], s=10, color=color, label=f"{name.upper()} = {beta:g}")
        try:
            model = fit_ols(data, response=column, regressor="nrou", quadratic=True)
            _draw_fit(ax, model, data["nrou"], color)
        except InsufficientData as e:
            logger.warning("No fit line for scenario %s: %s", name, e)

    ax.legend(title="Beta Scenarios")
    _style(
        ax,
        "Modified Phillips Curve: Expected Inflation Scenarios",
        f"Expected Inflation and Natural Rate of Unemployment from {period[0]} to {period[1]}",
        "Modeled Natural Rate of Unemployment",
        "Inflation",
        SOURCES_CLEVELAND,
        percent_x=True,
    )
    return fig


def plot_unemployment_comparison(
    table: pd.DataFrame,
    settings: AnalysisSettings,
    period: tuple[int, int] = (2009, 2017),
) -> Figure:
    """U6 against U3 with a quadratic fit."""
    data = select_period(table, *period)

    fig, ax = plt.subplots(figsize=(8, 6))
    ax.scatter(data["u3"], data["u6"], s=10, color=settings.palette[0])
    try:
        model = fit_ols(data, response="u6", regressor="u3", quadratic=True)
        _draw_fit(ax, model, data["u3"], settings.palette[1])
    except InsufficientData as e:
        logger.warning("No fit line for U3/U6 comparison: %s", e)

    _style(
        ax,
        "Comparison of U3 and U6 Unemployment Rates",
        _period_subtitle(period),
        "U3 Unemployment Rate",
        "U6 Unemployment Rate",
        SOURCES_BLS,
        percent_x=True,
    )
    return fig


def save_figure(fig: Figure, path: Path) -> Path:
    """Write a figure as PNG and close it."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved chart %s", path)
    return path
