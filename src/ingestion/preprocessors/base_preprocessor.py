"""Abstract base class for all data preprocessors.

Enforces the Silver (Processed) contract:
- Canonical month dates in a `date` column (first day of month)
- Standardized snake_case column names across all sources
- Validated data types
- No duplicate observations
- File naming: {category}_{identifier}_{YYYY-MM}_{YYYY-MM}.{format}

Preprocessors are responsible for Bronze → Silver transformation. They never
mutate their inputs and only touch the filesystem in export().
"""

from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from src.shared.utils import setup_logger


class BasePreprocessor(ABC):
    """Base class for all data preprocessors.

    Subclasses must define:
        CATEGORY (str): data category for output (e.g., "series").

    Subclasses must implement:
        validate(): ensure data conforms to the Silver contract.

    The export() method handles file naming and format selection.
    """

    CATEGORY: str  # e.g. "series"

    def __init__(
        self,
        output_dir: Path | None = None,
        log_file: Path | None = None,
    ) -> None:
        """Initialize the preprocessor.

        Args:
            output_dir: Directory for Silver exports (only needed by export()).
            log_file: Optional path for file-based logging.
        """
        self.output_dir = output_dir
        self.logger = setup_logger(f"{type(self).__module__}.{type(self).__name__}", log_file)

    @abstractmethod
    def validate(self, df: pd.DataFrame) -> bool:
        """Validate that DataFrame conforms to the Silver schema.

        Args:
            df: DataFrame to validate.

        Returns:
            True if valid.

        Raises:
            PhillipsCurveError: If validation fails with details.
        """
        ...

    def export(
        self,
        df: pd.DataFrame,
        identifier: str,
        format: str = "csv",
    ) -> Path:
        """Export DataFrame to the Silver layer.

        File path: {output_dir}/{CATEGORY}_{identifier}_{YYYY-MM}_{YYYY-MM}.{format}
        The date range is taken from the frame's `date` column.

        Args:
            df: DataFrame to export.
            identifier: Dataset identifier (e.g., "primary", "nrou").
            format: Output format ("csv" or "parquet").

        Returns:
            Path to the written file.

        Raises:
            ValueError: If the DataFrame is empty, format is invalid or no
                output directory is configured.
        """
        if self.output_dir is None:
            raise ValueError("No output directory configured for export")

        if df.empty:
            raise ValueError(f"Cannot export empty DataFrame for '{identifier}'")

        if format not in ("csv", "parquet"):
            raise ValueError(f"Invalid format '{format}'. Must be 'csv' or 'parquet'.")

        start_str = df["date"].min().strftime("%Y-%m")
        end_str = df["date"].max().strftime("%Y-%m")
        parts = [self.CATEGORY] + ([identifier] if identifier else []) + [start_str, end_str]
        filename = f"{'_'.join(parts)}.{format}"

        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / filename

        if format == "csv":
            df.to_csv(path, index=False, encoding="utf-8", date_format="%Y-%m-%d")
        else:  # parquet
            df.to_parquet(path, index=False, engine="pyarrow")

        self.logger.info("Exported %d records to %s", len(df), path)
        return path
