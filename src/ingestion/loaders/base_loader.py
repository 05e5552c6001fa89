"""Abstract base class for all raw source loaders.

Enforces the Bronze (Raw) contract:
- Preserve all source observations (no cleaning, no relabeling)
- snake_case column names
- Year and month kept as separate integer-like columns
- Add `source` column

Loaders are responsible ONLY for parsing source files.
Canonicalization (Bronze → Silver) is handled by the SeriesNormalizer.
"""

from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd

from src.shared.exceptions import SchemaError
from src.shared.utils import setup_logger


class BaseLoader(ABC):
    """Base class for all source loaders.

    Subclasses must define:
        SOURCE_NAME (str): identifier stored in the `source` column.
        REQUIRED_COLUMNS (list[str]): snake_case columns the file must provide.

    Subclasses must implement:
        parse(): turn the raw CSV frame into the Bronze layout.
    """

    SOURCE_NAME: str
    REQUIRED_COLUMNS: list[str]

    def __init__(self, path: Path, log_file: Path | None = None) -> None:
        """Initialize the loader.

        Args:
            path: CSV file to read.
            log_file: Optional path for file-based logging.
        """
        self.path = Path(path)
        self.logger = setup_logger(f"{type(self).__module__}.{type(self).__name__}", log_file)

    def load(self) -> pd.DataFrame:
        """Read the source file and return it in Bronze layout.

        Raises:
            FileNotFoundError: If the file does not exist.
            SchemaError: If required columns are missing.
        """
        if not self.path.exists():
            raise FileNotFoundError(f"Source file not found: {self.path}")

        raw = pd.read_csv(self.path, encoding="utf-8")
        raw.columns = [self._snake_case(c) for c in raw.columns]

        missing_cols = set(self.REQUIRED_COLUMNS) - set(raw.columns)
        if missing_cols:
            raise SchemaError(f"{self.path.name} missing columns: {sorted(missing_cols)}")

        df = self.parse(raw)
        df["source"] = self.SOURCE_NAME
        self.logger.info("Loaded %d records from %s", len(df), self.path.name)
        return df

    @abstractmethod
    def parse(self, raw: pd.DataFrame) -> pd.DataFrame:
        """Select and rename raw columns into the Bronze layout.

        Args:
            raw: CSV contents with snake_case column names.

        Returns:
            New DataFrame in the loader's Bronze layout.
        """
        ...

    @staticmethod
    def _snake_case(column: str) -> str:
        return str(column).strip().lower().replace(" ", "_")
