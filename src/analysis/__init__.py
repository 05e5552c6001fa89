"""Phillips curve analysis stages: rates, joins, scenarios, periods, regressions."""

from src.analysis.expectations import expected_inflation, melt_scenarios
from src.analysis.joiner import join_on_date
from src.analysis.periods import DECADE_WINDOWS, Window, group_by_decade, select_period
from src.analysis.rates import compute_rates, gap_months
from src.analysis.regression import (
    FittedModel,
    WindowFit,
    fit_linear,
    fit_nonlinear,
    fit_ols,
    fit_windows,
)

__all__ = [
    "DECADE_WINDOWS",
    "FittedModel",
    "Window",
    "WindowFit",
    "compute_rates",
    "expected_inflation",
    "fit_linear",
    "fit_nonlinear",
    "fit_ols",
    "fit_windows",
    "gap_months",
    "group_by_decade",
    "join_on_date",
    "melt_scenarios",
    "select_period",
]
