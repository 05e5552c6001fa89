"""Series Normalizer - Bronze to Silver transformation.

Transforms raw Bronze observations into canonical TimeSeriesRows:
- Resolves label variants through an explicit LabelMap
- Derives a canonical month `date` from separate year/month fields
- Reshapes wide (year x month) tables into dated rows
- Merges the monthly labor-force source when running at monthly granularity
- Rejects duplicate (date, field) observations

Silver schema (TimeSeriesRow):
    date: first day of the observed month (datetime64)
    field: canonical field name (e.g. "cpi", "unemp_level", "civ_labor_force")
    value: numeric observation value

Auxiliary series (NROU, U6) are normalized to two columns: [date, <name>].

Example:
    >>> from src.ingestion.loaders import CaseStudyLoader, FredSeriesLoader
    >>> from src.ingestion.preprocessors import DEFAULT_LABEL_MAP, SeriesNormalizer
    >>>
    >>> raw = CaseStudyLoader(Path("data/raw/Case_Study_Data.csv")).load()
    >>> clf = FredSeriesLoader(Path("data/raw/FRED_clf.csv"), "CLF16OV").load()
    >>> normalizer = SeriesNormalizer()
    >>> rows = normalizer.normalize(raw, DEFAULT_LABEL_MAP, "monthly", labor_force=clf)
    >>> wide = normalizer.to_wide(rows)  # one row per date: cpi, civ_labor_force, unemp_level
"""

from pathlib import Path

import pandas as pd

from src.ingestion.loaders.bls_loader import MONTH_COLUMNS
from src.ingestion.preprocessors.base_preprocessor import BasePreprocessor
from src.ingestion.preprocessors.label_map import CIV_LABOR_FORCE, LabelMap
from src.shared.exceptions import (
    DuplicateObservation,
    InvalidGranularity,
    MissingAuxiliarySource,
    SchemaError,
)
from src.shared.utils import to_dates

GRANULARITIES = ("monthly", "quarterly")


class SeriesNormalizer(BasePreprocessor):
    """Preprocessor for the study's time series (Bronze → Silver).

    Features:
        - Explicit label canonicalization (fails on unknown labels)
        - Long → canonical rows, wide → dated rows
        - Monthly/quarterly granularity modes
        - Duplicate detection (never averaged or dropped)
        - Schema enforcement
    """

    CATEGORY = "series"

    # Silver schema columns
    SILVER_COLUMNS = ["date", "field", "value"]

    # Required columns in Bronze data
    PRIMARY_COLUMNS = ["year", "month", "series_name", "value"]
    SPLIT_COLUMNS = ["year", "month", "value"]

    def __init__(
        self,
        output_dir: Path | None = None,
        log_file: Path | None = None,
    ) -> None:
        """Initialize the series normalizer.

        Args:
            output_dir: Directory for Silver exports (only used by export()).
            log_file: Optional path for file-based logging.
        """
        super().__init__(output_dir=output_dir, log_file=log_file)

    def normalize(
        self,
        raw_rows: pd.DataFrame,
        label_map: LabelMap,
        granularity: str,
        labor_force: pd.DataFrame | None = None,
    ) -> pd.DataFrame:
        """Transform primary RawObservations into canonical TimeSeriesRows.

        Args:
            raw_rows: Long-layout rows [year, month, series_name, value].
            label_map: Raw label → canonical field configuration.
            granularity: "monthly" or "quarterly".
            labor_force: Split-layout civilian labor force rows
                [year, month, value]; required when granularity is "monthly",
                where it replaces the primary source's own labor force field.

        Returns:
            DataFrame [date, field, value] sorted by (date, field).

        Raises:
            InvalidGranularity: If granularity is not recognized.
            MissingAuxiliarySource: If monthly mode has no labor force source.
            UnrecognizedSeriesLabel: If a label is missing from label_map.
            InvalidDate: If a month is outside 1-12.
            DuplicateObservation: If a (date, field) pair occurs twice.
        """
        if granularity not in GRANULARITIES:
            raise InvalidGranularity(
                f"Granularity must be one of {GRANULARITIES}, got '{granularity}'"
            )
        if granularity == "monthly" and labor_force is None:
            raise MissingAuxiliarySource(
                "Monthly granularity requires the civilian labor force source"
            )

        self._require_columns(raw_rows, self.PRIMARY_COLUMNS, "primary source")
        self.logger.info("Normalizing %d primary observations (%s)", len(raw_rows), granularity)

        rows = pd.DataFrame(
            {
                "date": to_dates(raw_rows["year"], raw_rows["month"]),
                "field": label_map.canonicalize(raw_rows["series_name"]),
                "value": pd.to_numeric(raw_rows["value"], errors="coerce"),
            }
        )
        rows = self._drop_missing(rows, "value", "primary source")
        self._check_duplicates(rows, ["date", "field"], "primary source")

        if granularity == "monthly":
            self.logger.info("Updating analysis with monthly labor data")
            monthly = self.normalize_auxiliary(labor_force, CIV_LABOR_FORCE)
            monthly = monthly.rename(columns={CIV_LABOR_FORCE: "value"})
            monthly["field"] = CIV_LABOR_FORCE
            rows = pd.concat(
                [rows[rows["field"] != CIV_LABOR_FORCE], monthly[self.SILVER_COLUMNS]],
                ignore_index=True,
            )
        elif labor_force is not None:
            self.logger.info("Quarterly granularity: ignoring supplied labor force source")
        else:
            self.logger.info("Continuing analysis with quarterly labor data")

        rows = rows.sort_values(["date", "field"]).reset_index(drop=True)
        self.validate(rows)
        return rows

    def normalize_auxiliary(self, rows: pd.DataFrame, name: str) -> pd.DataFrame:
        """Normalize a split-layout source [year, month, value] to [date, name].

        Raises:
            InvalidDate: If a month is outside 1-12.
            DuplicateObservation: If a month occurs twice.
        """
        self._require_columns(rows, self.SPLIT_COLUMNS, f"{name} source")

        series = pd.DataFrame(
            {
                "date": to_dates(rows["year"], rows["month"]),
                name: pd.to_numeric(rows["value"], errors="coerce"),
            }
        )
        series = self._drop_missing(series, name, f"{name} source")
        self._check_duplicates(series, ["date"], f"{name} source")

        series = series.sort_values("date").reset_index(drop=True)
        self.logger.info("Normalized %d %s observations", len(series), name)
        return series

    def normalize_wide(self, rows: pd.DataFrame, name: str) -> pd.DataFrame:
        """Normalize a wide year x month source (e.g. BLS U6) to [date, name]."""
        return self.normalize_auxiliary(self.melt_wide(rows), name)

    @staticmethod
    def melt_wide(rows: pd.DataFrame) -> pd.DataFrame:
        """Reshape [year, jan, ..., dec] into split layout [year, month, value].

        Empty month cells (e.g. months after the last release) are dropped.
        """
        if "year" not in rows.columns:
            raise SchemaError("Wide source missing columns: ['year']")

        month_cols = [c for c in MONTH_COLUMNS if c in rows.columns]
        melted = rows.melt(
            id_vars="year", value_vars=month_cols, var_name="month", value_name="value"
        )
        melted["month"] = melted["month"].map(lambda m: MONTH_COLUMNS.index(m) + 1)
        melted = melted.dropna(subset=["value"])
        return melted.sort_values(["year", "month"]).reset_index(drop=True)

    @staticmethod
    def to_wide(rows: pd.DataFrame) -> pd.DataFrame:
        """Pivot TimeSeriesRows into one row per date with one column per field."""
        wide = rows.pivot(index="date", columns="field", values="value")
        wide.columns.name = None
        return wide.sort_index().reset_index()

    @staticmethod
    def to_raw(rows: pd.DataFrame) -> pd.DataFrame:
        """Re-wrap TimeSeriesRows as long-layout RawObservations."""
        return pd.DataFrame(
            {
                "year": rows["date"].dt.year,
                "month": rows["date"].dt.month,
                "series_name": rows["field"],
                "value": rows["value"],
            }
        )

    def validate(self, df: pd.DataFrame) -> bool:
        """Validate that DataFrame conforms to the TimeSeriesRow schema.

        Checks:
        - Exactly the Silver columns
        - date is datetime64
        - value is numeric and non-null
        - No duplicate (date, field) pairs

        Raises:
            SchemaError: If columns or types are wrong.
            DuplicateObservation: If a (date, field) pair repeats.
        """
        missing_cols = set(self.SILVER_COLUMNS) - set(df.columns)
        if missing_cols:
            raise SchemaError(f"Missing required columns: {sorted(missing_cols)}")

        extra_cols = set(df.columns) - set(self.SILVER_COLUMNS)
        if extra_cols:
            raise SchemaError(f"Unexpected columns: {sorted(extra_cols)}")

        if not pd.api.types.is_datetime64_any_dtype(df["date"]):
            raise SchemaError("date column must be datetime64")

        if not pd.api.types.is_numeric_dtype(df["value"]):
            raise SchemaError("value column must be numeric")

        if df["value"].isna().any():
            raise SchemaError("value column contains NaN")

        self._check_duplicates(df, ["date", "field"], "silver rows")
        return True

    def _require_columns(self, df: pd.DataFrame, columns: list[str], what: str) -> None:
        missing_cols = set(columns) - set(df.columns)
        if missing_cols:
            raise SchemaError(f"{what} missing columns: {sorted(missing_cols)}")

    def _drop_missing(self, df: pd.DataFrame, column: str, what: str) -> pd.DataFrame:
        initial_count = len(df)
        df = df.dropna(subset=[column])
        dropped = initial_count - len(df)
        if dropped > 0:
            self.logger.warning("Dropped %d rows with missing values from %s", dropped, what)
        return df

    @staticmethod
    def _check_duplicates(df: pd.DataFrame, keys: list[str], what: str) -> None:
        duplicates = df.duplicated(subset=keys, keep=False)
        if duplicates.any():
            sample = df.loc[duplicates, keys].drop_duplicates().head(3).to_dict("records")
            raise DuplicateObservation(
                f"Found {int(duplicates.sum())} rows sharing {keys} in {what}, e.g. {sample}"
            )


def normalize(
    raw_rows: pd.DataFrame,
    label_map: LabelMap,
    granularity: str,
    labor_force: pd.DataFrame | None = None,
) -> pd.DataFrame:
    """Functional entry point for SeriesNormalizer.normalize()."""
    return SeriesNormalizer().normalize(raw_rows, label_map, granularity, labor_force)
