"""
Table Validation and Quality Checks
Shared by every analysis stage
"""

from typing import Mapping

import pandas as pd

from src.shared.exceptions import SchemaError, UnsortedInput


# -----------------------------
# Schema Validation
# -----------------------------

def validate_columns(df: pd.DataFrame, schema: Mapping[str, object], what: str = "table") -> None:
    """
    Validate that the dataframe provides the columns of a schema.

    Enforces:
    - required columns
    - datetime dtype for date columns
    - numeric dtype for value columns

    Raises:
        SchemaError: missing columns or wrong dtypes
    """

    missing = set(schema.keys()) - set(df.columns)
    if missing:
        raise SchemaError(f"{what} missing required columns: {sorted(missing)}")

    for column, expected_type in schema.items():
        series = df[column]

        if expected_type == "datetime64[ns]":
            if not pd.api.types.is_datetime64_any_dtype(series):
                raise SchemaError(
                    f"{what}: column '{column}' must be datetime64, got {series.dtype}"
                )
            continue

        if expected_type is float and not pd.api.types.is_numeric_dtype(series):
            raise SchemaError(
                f"{what}: column '{column}' must be numeric, got {series.dtype}"
            )


# -----------------------------
# Quality Checks
# -----------------------------

def check_missing_values(df: pd.DataFrame):
    """
    Detect missing values explicitly.
    Returns a JSON-serialisable report dictionary.
    """

    total_rows = int(len(df))

    missing_series = df.isna().sum()
    missing_by_column = {
        col: int(count)
        for col, count in missing_series.items()
        if count > 0
    }

    return {
        "total_rows": total_rows,
        "missing_by_column": missing_by_column,
        "has_missing": bool(missing_by_column),
    }


def check_monotonic_dates(df: pd.DataFrame, what: str = "table"):
    """
    Ensure dates are strictly increasing (sorted, no repeats).
    """

    dates = df["date"]
    if not (dates.is_monotonic_increasing and dates.is_unique):
        raise UnsortedInput(f"{what}: dates are not strictly increasing")

    return True
