"""FRED series loader.

FRED downloads are reformatted with separate year/month columns and one value
column named after the FRED series ID:

    year,month,CLF16OV
    1948,1,60095

Used for the civilian labor force (CLF16OV) and the natural rate of
unemployment (NROU).
"""

from pathlib import Path

import pandas as pd

from src.ingestion.loaders.base_loader import BaseLoader

# FRED series used by the study
FRED_SERIES: dict[str, str] = {
    "CLF16OV": "Civilian Labor Force Level",
    "NROU": "Noncyclical Rate of Unemployment",
}


class FredSeriesLoader(BaseLoader):
    """Loads one single-series FRED file.

    Bronze columns: [year, month, value, source]
    """

    SOURCE_NAME = "fred"

    def __init__(self, path: Path, series_id: str, log_file: Path | None = None) -> None:
        """Initialize the loader.

        Args:
            path: CSV file to read.
            series_id: FRED series ID naming the value column (e.g. "NROU").
            log_file: Optional path for file-based logging.
        """
        super().__init__(path, log_file)
        self.series_id = series_id
        self.REQUIRED_COLUMNS = ["year", "month", series_id.lower()]
        if series_id not in FRED_SERIES:
            self.logger.warning("Unregistered FRED series: %s", series_id)

    def parse(self, raw: pd.DataFrame) -> pd.DataFrame:
        self.logger.debug("Parsing %s (%s)", self.series_id, FRED_SERIES.get(self.series_id, "?"))
        return pd.DataFrame(
            {
                "year": raw["year"],
                "month": raw["month"],
                "value": pd.to_numeric(raw[self.series_id.lower()], errors="coerce"),
            }
        )
