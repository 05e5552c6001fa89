"""BLS wide-layout loader.

BLS table exports carry one row per year and one column per month:

    Year,Jan,Feb,Mar,...,Dec
    2009,14.2,15.1,15.7,...,17.1

The loader keeps the wide layout; melting into dated rows is the
normalizer's job.
"""

import pandas as pd

from src.ingestion.loaders.base_loader import BaseLoader

MONTH_COLUMNS = ["jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec"]

_MONTH_NAMES = {
    "january", "february", "march", "april", "may", "june", "july",
    "august", "september", "sept", "october", "november", "december",
}


def month_key(column: str) -> str | None:
    """Map a month header ("Jan", "january", "1", "01") to its 3-letter key."""
    name = str(column).strip().lower()
    if name.isdigit():
        number = int(name)
        return MONTH_COLUMNS[number - 1] if 1 <= number <= 12 else None
    if name in MONTH_COLUMNS or name in _MONTH_NAMES:
        return name[:3]
    return None


class BLSWideLoader(BaseLoader):
    """Loads a BLS year-by-month table (e.g. U6, series LNS13327709).

    Bronze columns: [year, jan, ..., dec, source]. Months missing from the file
    (e.g. a partial final year) are kept as empty cells.
    """

    SOURCE_NAME = "bls"
    REQUIRED_COLUMNS = ["year"]

    def parse(self, raw: pd.DataFrame) -> pd.DataFrame:
        month_cols = {c: month_key(c) for c in raw.columns if month_key(c)}
        if not month_cols:
            self.logger.warning("No month columns found in %s", self.path.name)

        df = pd.DataFrame({"year": raw["year"]})
        for col, key in month_cols.items():
            df[key] = pd.to_numeric(raw[col], errors="coerce")
        return df
