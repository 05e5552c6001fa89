"""
Period Selector
Inclusive year windows and decade grouping
"""

from typing import NamedTuple

import pandas as pd

from src.shared.exceptions import InvalidParameter
from src.shared.utils import decade_of


class Window(NamedTuple):
    label: str
    start: int
    end: int


# Decade windows used for the regression tables (data end in 2017)
DECADE_WINDOWS: list[Window] = [
    Window("1950s", 1950, 1959),
    Window("1960s", 1960, 1969),
    Window("1970s", 1970, 1979),
    Window("1980s", 1980, 1989),
    Window("1990s", 1990, 1999),
    Window("2000s", 2000, 2009),
    Window("2010s", 2010, 2017),
    Window("Full", 1949, 2017),
]


def select_period(table: pd.DataFrame, year_start: int, year_end: int) -> pd.DataFrame:
    """
    Rows whose calendar year lies in [year_start, year_end].

    An empty frame is returned when nothing falls in range; callers fitting
    models must handle it.

    Raises:
        InvalidParameter: year_start after year_end
    """
    if year_start > year_end:
        raise InvalidParameter(f"Period start {year_start} is after end {year_end}")

    years = table["date"].dt.year
    mask = (years >= year_start) & (years <= year_end)
    return table.loc[mask].reset_index(drop=True)


def group_by_decade(table: pd.DataFrame) -> dict[int, pd.DataFrame]:
    """
    Split a table into one frame per decade (year // 10 * 10), ascending.
    """
    decades = table["date"].dt.year.map(decade_of)
    return {
        int(decade): group.reset_index(drop=True)
        for decade, group in table.groupby(decades, sort=True)
    }
