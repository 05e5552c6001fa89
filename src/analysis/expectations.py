"""
Expected-Inflation Model
Scenario-adjusted inflation from response coefficients
"""

from collections.abc import Mapping, Sequence
from numbers import Real

import pandas as pd

from src.analysis.schema import EXPECTATION_SCHEMA
from src.analysis.validate import validate_columns
from src.shared.exceptions import InvalidParameter

SCENARIO_PREFIX = "infl_exp_"


def scenario_betas(betas: Mapping[str, float] | Sequence[float]) -> dict[str, float]:
    """
    Normalize response coefficients to {scenario name: coefficient}.

    A plain sequence is named b1..bn in order.

    Raises:
        InvalidParameter: empty or non-numeric coefficients
    """
    if isinstance(betas, Mapping):
        items = list(betas.items())
    else:
        items = [(f"b{i}", b) for i, b in enumerate(betas, start=1)]

    if not items:
        raise InvalidParameter("At least one response coefficient is required")

    named = {}
    for name, beta in items:
        if isinstance(beta, bool) or not isinstance(beta, Real):
            raise InvalidParameter(f"Coefficient '{name}' must be a number, got {beta!r}")
        named[str(name)] = float(beta)
    return named


def expected_inflation(
    table: pd.DataFrame,
    betas: Mapping[str, float] | Sequence[float],
) -> pd.DataFrame:
    """
    Add one expected-inflation column per response coefficient.

        infl_exp_<name> = inflation + b * (u3 - nrou)

    Pure per-row transform; the input table is not modified.

    Raises:
        InvalidParameter: empty betas
        SchemaError: missing inflation/u3/nrou columns
    """
    named = scenario_betas(betas)
    validate_columns(table, EXPECTATION_SCHEMA, "expected-inflation input")

    result = table.copy()
    gap = result["u3"] - result["nrou"]
    for name, beta in named.items():
        result[f"{SCENARIO_PREFIX}{name}"] = result["inflation"] + beta * gap

    return result


def melt_scenarios(table: pd.DataFrame) -> pd.DataFrame:
    """
    Reshape expected-inflation columns to long form [date, nrou, scenario, value].
    """
    scenario_cols = [c for c in table.columns if c.startswith(SCENARIO_PREFIX)]
    long = table.melt(
        id_vars=["date", "nrou"],
        value_vars=scenario_cols,
        var_name="scenario",
        value_name="value",
    )
    long["scenario"] = long["scenario"].str.removeprefix(SCENARIO_PREFIX)
    return long
