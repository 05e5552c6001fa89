"""
Regression Fitter
Linear and quadratic OLS of inflation on unemployment-rate variants
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

import numpy as np
import pandas as pd
import statsmodels.api as sm

from src.analysis.periods import Window, select_period
from src.shared.exceptions import InsufficientData, SchemaError
from src.shared.utils import setup_logger

logger = setup_logger(__name__)

LINEAR = "linear"
NONLINEAR = "nonlinear"


@dataclass(frozen=True)
class FittedModel:
    """
    Estimates of one OLS fit, ready for tables and charts.

    `results` keeps the statsmodels results object for table export; it is
    excluded from equality and repr.
    """

    kind: str
    response: str
    regressor: str
    period_start: int | None
    period_end: int | None
    nobs: int
    params: dict[str, float]
    bse: dict[str, float]
    pvalues: dict[str, float]
    rsquared: float
    rsquared_adj: float
    results: Any = field(default=None, repr=False, compare=False)

    @property
    def formula(self) -> str:
        terms = [self.regressor]
        if self.kind == NONLINEAR:
            terms.append(f"I({self.regressor}^2)")
        return f"{self.response} ~ {' + '.join(terms)}"

    def predict(self, x: np.ndarray | pd.Series) -> np.ndarray:
        """Fitted response values at regressor values x."""
        x = np.asarray(x, dtype=float)
        y = self.params["const"] + self.params[self.regressor] * x
        if self.kind == NONLINEAR:
            y = y + self.params[f"{self.regressor}_sq"] * x**2
        return y

    def to_dict(self) -> dict:
        """JSON-serialisable summary (no statsmodels objects)."""
        return {
            "kind": self.kind,
            "formula": self.formula,
            "period_start": self.period_start,
            "period_end": self.period_end,
            "nobs": self.nobs,
            "params": self.params,
            "bse": self.bse,
            "pvalues": self.pvalues,
            "rsquared": self.rsquared,
            "rsquared_adj": self.rsquared_adj,
        }


@dataclass(frozen=True)
class WindowFit:
    """Outcome of fitting one period window: a model or the reason it failed."""

    label: str
    period_start: int
    period_end: int
    model: FittedModel | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.model is not None

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "period_start": self.period_start,
            "period_end": self.period_end,
            "status": "ok" if self.ok else "failed",
            "model": self.model.to_dict() if self.ok else None,
            "error": self.error,
        }


def fit_ols(
    table: pd.DataFrame,
    response: str = "inflation",
    regressor: str = "u3",
    quadratic: bool = False,
    period: tuple[int, int] | None = None,
) -> FittedModel:
    """
    Ordinary least squares of response on regressor (and its square).

    Args:
        table: Date-keyed table holding both columns.
        response: Dependent variable column.
        regressor: Explanatory variable column.
        quadratic: Add the squared regressor term.
        period: Optional inclusive (year_start, year_end) slice.

    At least one residual degree of freedom is required: a sample with as
    many rows as parameters (2 linear, 3 quadratic) raises InsufficientData
    as well, since its standard errors are undefined.

    Raises:
        SchemaError: missing columns
        InsufficientData: too few rows or a rank-deficient design
    """
    missing = {response, regressor, "date"} - set(table.columns)
    if missing:
        raise SchemaError(f"Regression input missing columns: {sorted(missing)}")

    data = table if period is None else select_period(table, *period)
    data = data[[response, regressor]].dropna()

    x = data[regressor].astype(float)
    design = pd.DataFrame({"const": 1.0, regressor: x}, index=data.index)
    if quadratic:
        design[f"{regressor}_sq"] = x**2

    kind = NONLINEAR if quadratic else LINEAR
    n_params = design.shape[1]
    nobs = len(data)
    where = f"{period[0]}-{period[1]}" if period else "all periods"

    # Standard errors need at least one residual degree of freedom
    if nobs <= n_params:
        raise InsufficientData(
            f"{kind} fit of {response} on {regressor} ({where}) needs more than "
            f"{n_params} observations, got {nobs}"
        )
    if np.linalg.matrix_rank(design.to_numpy()) < n_params:
        raise InsufficientData(
            f"{kind} fit of {response} on {regressor} ({where}) has a degenerate design"
        )

    results = sm.OLS(data[response].astype(float), design).fit()

    if not np.all(np.isfinite(results.params)):
        raise InsufficientData(f"{kind} fit ({where}) produced non-finite coefficients")

    logger.debug("Fitted %s over %s: R2=%.4f, n=%d", kind, where, results.rsquared, nobs)

    return FittedModel(
        kind=kind,
        response=response,
        regressor=regressor,
        period_start=period[0] if period else None,
        period_end=period[1] if period else None,
        nobs=int(results.nobs),
        params={k: float(v) for k, v in results.params.items()},
        bse={k: float(v) for k, v in results.bse.items()},
        pvalues={k: float(v) for k, v in results.pvalues.items()},
        rsquared=float(results.rsquared),
        rsquared_adj=float(results.rsquared_adj),
        results=results,
    )


def fit_linear(
    table: pd.DataFrame,
    period: tuple[int, int] | None = None,
    regressor: str = "u3",
) -> FittedModel:
    """inflation ~ b0 + b1 * regressor"""
    return fit_ols(table, "inflation", regressor, quadratic=False, period=period)


def fit_nonlinear(
    table: pd.DataFrame,
    period: tuple[int, int] | None = None,
    regressor: str = "u3",
) -> FittedModel:
    """inflation ~ b0 + b1 * regressor + b2 * regressor^2"""
    return fit_ols(table, "inflation", regressor, quadratic=True, period=period)


def fit_windows(
    table: pd.DataFrame,
    windows: Iterable[Window],
    kind: str = LINEAR,
    regressor: str = "u3",
) -> list[WindowFit]:
    """
    Fit every window independently.

    A window with insufficient data is recorded as failed and does not stop
    the remaining windows. Structural errors (e.g. missing columns) propagate.
    """
    if kind not in (LINEAR, NONLINEAR):
        raise ValueError(f"Unknown model kind '{kind}'")

    fitter = fit_linear if kind == LINEAR else fit_nonlinear

    fits = []
    for window in windows:
        try:
            model = fitter(table, period=(window.start, window.end), regressor=regressor)
            fits.append(WindowFit(window.label, window.start, window.end, model=model))
        except InsufficientData as e:
            logger.warning("Window %s (%d-%d) failed: %s", window.label, window.start, window.end, e)
            fits.append(WindowFit(window.label, window.start, window.end, error=str(e)))

    succeeded = sum(fit.ok for fit in fits)
    logger.info("Fitted %d/%d %s windows", succeeded, len(fits), kind)
    return fits
