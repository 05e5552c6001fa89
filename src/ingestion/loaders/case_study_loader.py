"""Primary case-study source loader.

The primary file is in long layout, one row per reported fact:

    Year,Month,Data,Value
    1948,1,Consumer Price Index,23.68
    1948,1,Unemployment Level,2034
    ...

Labels are passed through untouched; "CPI" and "Consumer Price Index" both
occur and are reconciled later by the label map.
"""

import pandas as pd

from src.ingestion.loaders.base_loader import BaseLoader


class CaseStudyLoader(BaseLoader):
    """Loads the primary long-layout source into RawObservation rows.

    Bronze columns: [year, month, series_name, value, source]
    """

    SOURCE_NAME = "case_study"
    REQUIRED_COLUMNS = ["year", "month", "data", "value"]

    def parse(self, raw: pd.DataFrame) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "year": raw["year"],
                "month": raw["month"],
                "series_name": raw["data"].astype(str),
                "value": pd.to_numeric(raw["value"], errors="coerce"),
            }
        )
