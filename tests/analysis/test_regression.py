"""Unit tests for the regression fitter."""

import numpy as np
import pandas as pd
import pytest

from src.analysis.periods import DECADE_WINDOWS, Window
from src.analysis.regression import (
    LINEAR,
    NONLINEAR,
    fit_linear,
    fit_nonlinear,
    fit_ols,
    fit_windows,
)
from src.shared.exceptions import InsufficientData, SchemaError


def _table(start: str, periods: int, intercept=3.0, slope=-0.5, curvature=0.0, noise=0.01):
    dates = pd.date_range(start, periods=periods, freq="MS")
    u3 = 4.0 + 3.0 * np.sin(np.arange(periods) / 5.0)
    wiggle = noise * np.cos(np.arange(periods) * 1.7)
    inflation = intercept + slope * u3 + curvature * u3**2 + wiggle
    return pd.DataFrame({"date": dates, "inflation": inflation, "u3": u3})


@pytest.fixture
def linear_table():
    return _table("1950-01-01", 120)


class TestFitLinear:
    def test_exact_line_recovered(self):
        table = _table("1950-01-01", 60, noise=0.0)

        model = fit_linear(table)

        assert model.params["const"] == pytest.approx(3.0, abs=1e-9)
        assert model.params["u3"] == pytest.approx(-0.5, abs=1e-9)

    def test_recovers_coefficients(self, linear_table):
        model = fit_linear(linear_table)

        assert model.params["const"] == pytest.approx(3.0, abs=0.02)
        assert model.params["u3"] == pytest.approx(-0.5, abs=0.01)
        assert model.rsquared > 0.99

    def test_metadata(self, linear_table):
        model = fit_linear(linear_table, period=(1950, 1959))

        assert model.kind == LINEAR
        assert model.formula == "inflation ~ u3"
        assert (model.period_start, model.period_end) == (1950, 1959)
        assert model.nobs == 120
        assert set(model.bse) == {"const", "u3"}

    def test_period_restricts_rows(self, linear_table):
        model = fit_linear(linear_table, period=(1950, 1951))
        assert model.nobs == 24

    def test_deterministic(self, linear_table):
        first = fit_linear(linear_table)
        second = fit_linear(linear_table)

        assert first == second

    def test_predict(self, linear_table):
        model = fit_linear(linear_table)

        predicted = model.predict([0.0, 2.0])

        assert predicted == pytest.approx([3.0, 2.0], abs=0.05)

    def test_to_dict_is_plain(self, linear_table):
        summary = fit_linear(linear_table).to_dict()

        assert summary["formula"] == "inflation ~ u3"
        assert isinstance(summary["params"]["u3"], float)
        assert "results" not in summary


class TestFitNonlinear:
    def test_recovers_quadratic(self):
        table = _table("1960-01-01", 120, intercept=6.0, slope=-1.2, curvature=0.08)

        model = fit_nonlinear(table)

        assert model.kind == NONLINEAR
        assert model.formula == "inflation ~ u3 + I(u3^2)"
        assert model.params["u3_sq"] == pytest.approx(0.08, abs=0.01)
        assert model.predict([5.0])[0] == pytest.approx(6.0 - 6.0 + 2.0, abs=0.05)

    def test_alternative_regressor(self):
        table = _table("2010-01-01", 60).rename(columns={"u3": "u6"})

        model = fit_nonlinear(table, regressor="u6")

        assert set(model.params) == {"const", "u6", "u6_sq"}


class TestFitErrors:
    def test_empty_window(self, linear_table):
        with pytest.raises(InsufficientData):
            fit_linear(linear_table, period=(1990, 1999))

    def test_too_few_rows(self, linear_table):
        with pytest.raises(InsufficientData):
            fit_linear(linear_table.head(2))

    def test_rows_equal_to_parameters_raise(self, linear_table):
        # Zero residual degrees of freedom leaves standard errors undefined
        with pytest.raises(InsufficientData, match="got 2"):
            fit_linear(linear_table.head(2))

        assert fit_linear(linear_table.head(3)).nobs == 3

    def test_quadratic_needs_four_rows(self, linear_table):
        with pytest.raises(InsufficientData):
            fit_nonlinear(linear_table.head(3))

    def test_constant_regressor(self, linear_table):
        linear_table["u3"] = 5.0

        with pytest.raises(InsufficientData, match="degenerate"):
            fit_linear(linear_table)

    def test_missing_column(self, linear_table):
        with pytest.raises(SchemaError, match="u3"):
            fit_ols(linear_table.drop(columns=["u3"]))

    def test_insufficient_data_is_value_error(self, linear_table):
        with pytest.raises(ValueError):
            fit_linear(linear_table.head(1))


class TestFitWindows:
    def test_failed_window_does_not_stop_others(self, linear_table):
        windows = [
            Window("1950s", 1950, 1959),
            Window("1960s", 1960, 1969),
            Window("Full", 1949, 2017),
        ]

        fits = fit_windows(linear_table, windows)

        assert [f.label for f in fits] == ["1950s", "1960s", "Full"]
        assert [f.ok for f in fits] == [True, False, True]
        assert fits[1].model is None
        assert fits[1].error

    def test_all_decades(self):
        table = _table("1949-01-01", 12 * 69)

        fits = fit_windows(table, DECADE_WINDOWS, kind=NONLINEAR)

        assert all(f.ok for f in fits)
        assert fits[-1].model.nobs == 12 * 69

    def test_window_to_dict(self, linear_table):
        fits = fit_windows(linear_table, [Window("1960s", 1960, 1969)])

        summary = fits[0].to_dict()

        assert summary["status"] == "failed"
        assert summary["model"] is None

    def test_unknown_kind(self, linear_table):
        with pytest.raises(ValueError, match="cubic"):
            fit_windows(linear_table, DECADE_WINDOWS, kind="cubic")
