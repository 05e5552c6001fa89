"""
Rate Calculator
Inflation and U3 unemployment rates from raw levels
"""

import numpy as np
import pandas as pd

from src.analysis.schema import RATE_INPUT_SCHEMA
from src.analysis.validate import check_monotonic_dates, validate_columns
from src.shared.utils import setup_logger

logger = setup_logger(__name__)


def compute_rates(rows: pd.DataFrame) -> pd.DataFrame:
    """
    Derive the PhillipsCurveTable [date, inflation, u3] from raw levels.

    inflation[t] = (cpi[t] / cpi[t_prev] - 1) * 100
    u3[t]        = unemp_level[t] / civ_labor_force[t] * 100

    t_prev is the closest earlier row that carries a CPI value, whatever its
    distance in months. Rows without CPI (e.g. months only present in the
    labor force source) are skipped by the lag. The lag is taken before
    incomplete rows are dropped, so a month that only lacks labor data still
    provides the prior CPI.

    The first row and every row with a missing input are dropped.

    Raises:
        SchemaError: missing level columns
        UnsortedInput: rows not strictly ascending by date (never re-sorted here)
    """
    validate_columns(rows, RATE_INPUT_SCHEMA, "rate input")
    check_monotonic_dates(rows, "rate input")

    df = rows[list(RATE_INPUT_SCHEMA)].copy()

    prev_cpi = df["cpi"].ffill().shift(1)
    df["inflation"] = (df["cpi"] / prev_cpi - 1) * 100
    df["u3"] = (df["unemp_level"] / df["civ_labor_force"]) * 100

    table = df[["date", "inflation", "u3"]].replace([np.inf, -np.inf], np.nan)
    table = table.dropna().reset_index(drop=True)

    spans = gap_months(rows.dropna(subset=["cpi"]))
    long_spans = int((spans[spans.index.isin(table["date"])] > 1).sum())
    if long_spans:
        logger.warning(
            "%d inflation values span more than one month (gaps in CPI dates)", long_spans
        )

    logger.info("Computed rates for %d of %d rows", len(table), len(rows))
    return table


def gap_months(rows: pd.DataFrame) -> pd.Series:
    """
    Months between each row and its predecessor, indexed by date.

    The first row has no predecessor (NaN). A value above 1 marks an
    inflation rate computed across a gap in the source data.
    """
    months = rows["date"].dt.year * 12 + rows["date"].dt.month
    spans = months.diff()
    spans.index = pd.DatetimeIndex(rows["date"])
    return spans.rename("gap_months")
