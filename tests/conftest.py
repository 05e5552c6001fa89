"""
Root pytest configuration.

Provides small in-memory source tables and a factory that writes a complete
synthetic set of raw CSV sources (case study, FRED CLF/NROU, BLS U6) so
loaders and the pipeline can be exercised without the real data files.
"""

from pathlib import Path

import matplotlib
import numpy as np
import pandas as pd
import pytest

matplotlib.use("Agg")

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


@pytest.fixture
def primary_raw() -> pd.DataFrame:
    """Bronze primary rows for 1950-01..1950-04 with both CPI labels."""
    rows = []
    cpi = [100.0, 101.0, 102.0, 101.0]
    unemp = [5.0, 5.0, 5.1, 5.0]
    for i, month in enumerate(range(1, 5)):
        cpi_label = "CPI" if month % 2 else "Consumer Price Index"
        rows.append({"year": 1950, "month": month, "series_name": cpi_label, "value": cpi[i]})
        rows.append({"year": 1950, "month": month, "series_name": "Unemployment Level", "value": unemp[i]})
        rows.append({"year": 1950, "month": month, "series_name": "Civilian Labor Force", "value": 100.0})
    df = pd.DataFrame(rows)
    df["source"] = "case_study"
    return df


@pytest.fixture
def labor_force_raw() -> pd.DataFrame:
    """Bronze FRED CLF rows covering 1950-01..1950-04."""
    return pd.DataFrame(
        {
            "year": [1950, 1950, 1950, 1950],
            "month": [1, 2, 3, 4],
            "value": [200.0, 200.0, 200.0, 200.0],
            "source": "fred",
        }
    )


def _synthetic_sources(start_year: int, end_year: int) -> dict[str, pd.DataFrame]:
    dates = pd.date_range(f"{start_year}-01-01", f"{end_year}-12-01", freq="MS")
    t = np.arange(len(dates))

    cpi = 20.0 * np.exp(np.cumsum(0.003 + 0.002 * np.sin(t / 7.0)))
    clf = 60000.0 + 120.0 * t
    u3 = 5.5 + 1.5 * np.sin(t / 23.0) + 0.3 * np.cos(t / 5.0)
    unemp = clf * u3 / 100.0

    case_rows = []
    for i, date in enumerate(dates):
        cpi_label = "CPI" if date.year % 2 else "Consumer Price Index"
        case_rows.append((date.year, date.month, cpi_label, round(cpi[i], 4)))
        case_rows.append((date.year, date.month, "Unemployment Level", round(unemp[i], 2)))
        if date.month in (1, 4, 7, 10):
            case_rows.append((date.year, date.month, "Civilian Labor Force", round(clf[i], 2)))
    case_study = pd.DataFrame(case_rows, columns=["Year", "Month", "Data", "Value"])

    fred_clf = pd.DataFrame(
        {"year": dates.year, "month": dates.month, "CLF16OV": np.round(clf + 15.0, 2)}
    )
    fred_nrou = pd.DataFrame(
        {"year": dates.year, "month": dates.month, "NROU": np.round(5.0 + 0.2 * np.sin(t / 40.0), 3)}
    )

    u6_years = [y for y in range(max(start_year, 1994), end_year + 1)]
    u6_rows = []
    for year in u6_years:
        row = {"Year": year}
        for m, name in enumerate(MONTH_NAMES):
            idx = (year - start_year) * 12 + m
            row[name] = round(u3[idx] * 1.8 + 0.1 * np.sin(idx), 2)
        u6_rows.append(row)
    bls_u6 = pd.DataFrame(u6_rows, columns=["Year"] + MONTH_NAMES)

    return {
        "Case_Study_Data.csv": case_study,
        "FRED_clf.csv": fred_clf,
        "FRED_nrou.csv": fred_nrou,
        "BLS_U6.csv": bls_u6,
    }


@pytest.fixture
def write_sources(tmp_path: Path):
    """Factory writing synthetic raw CSVs to {tmp_path}/data/raw; returns the data dir."""

    def _write(start_year: int = 1948, end_year: int = 2017) -> Path:
        raw_dir = tmp_path / "data" / "raw"
        raw_dir.mkdir(parents=True, exist_ok=True)
        for filename, df in _synthetic_sources(start_year, end_year).items():
            df.to_csv(raw_dir / filename, index=False)
        return tmp_path / "data"

    return _write
