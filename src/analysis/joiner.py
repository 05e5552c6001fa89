"""
Date Joiner
PhillipsCurveTable ⋈ AuxiliarySeries on exact month
"""

import warnings

import pandas as pd

from src.analysis.validate import validate_columns
from src.shared.exceptions import DuplicateObservation, EmptyJoinResult, SchemaError
from src.shared.utils import setup_logger

logger = setup_logger(__name__)

_DATE_SCHEMA = {"date": "datetime64[ns]"}


def join_on_date(primary: pd.DataFrame, auxiliary: pd.DataFrame) -> pd.DataFrame:
    """
    Inner join two date-keyed tables.

    - keyed on exact date equality (same year and month)
    - output ascending by date
    - dates present on one side only are dropped, never interpolated

    Raises:
        SchemaError: missing date column or clashing value columns
        DuplicateObservation: a date repeats on either side

    Warns:
        EmptyJoinResult: the date sets do not intersect
    """
    validate_columns(primary, _DATE_SCHEMA, "primary table")
    validate_columns(auxiliary, _DATE_SCHEMA, "auxiliary table")

    shared = (set(primary.columns) & set(auxiliary.columns)) - {"date"}
    if shared:
        raise SchemaError(f"Tables share non-key columns: {sorted(shared)}")

    for name, df in (("primary", primary), ("auxiliary", auxiliary)):
        repeated = df["date"].duplicated()
        if repeated.any():
            raise DuplicateObservation(
                f"{name} table has {int(repeated.sum())} repeated dates"
            )

    joined = primary.merge(auxiliary, on="date", how="inner", validate="one_to_one")
    joined = joined.sort_values("date").reset_index(drop=True)

    dropped_primary = len(primary) - len(joined)
    dropped_auxiliary = len(auxiliary) - len(joined)
    logger.info(
        "Joined %d rows on date (dropped %d primary, %d auxiliary)",
        len(joined),
        dropped_primary,
        dropped_auxiliary,
    )

    if joined.empty:
        logger.warning("Date join produced no rows")
        warnings.warn("Date join produced no rows", EmptyJoinResult, stacklevel=2)

    return joined
