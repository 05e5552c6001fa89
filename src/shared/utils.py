"""Shared utility functions for the Phillips curve study."""

import logging
from pathlib import Path

import pandas as pd

from src.shared.exceptions import InvalidDate


def setup_logger(
    name: str, log_file: Path | None = None, level: int | str | None = None
) -> logging.Logger:
    """Set up logger with console and file handlers.

    Args:
        name: Logger name
        log_file: Optional path to log file
        level: Logging level (int constant or string name like 'DEBUG', 'INFO').
            When omitted, a logger below a configured parent (see
            set_log_level) inherits its level; any other new logger gets INFO.

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Convert string level to int if needed
    if level is None:
        if logger.level == logging.NOTSET and logger.parent is logging.root:
            logger.setLevel(logging.INFO)
    elif isinstance(level, str):
        numeric_level = getattr(logging, level.upper(), logging.INFO)
        logger.setLevel(numeric_level)
    else:
        logger.setLevel(level)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # Console handler, attached once per logger name
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def set_log_level(level: int | str, prefix: str = "src") -> None:
    """Apply a level to every existing logger under a package prefix.

    Module loggers set their own level in setup_logger(), so changing the
    parent alone does not reach them.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logging.getLogger(prefix).setLevel(level)
    for name, logger in list(logging.root.manager.loggerDict.items()):
        if name.startswith(f"{prefix}.") and isinstance(logger, logging.Logger):
            logger.setLevel(level)


def to_date(year, month) -> pd.Timestamp:
    """Build the canonical month date (first day of month) from year/month.

    Raises:
        InvalidDate: If year or month is not integral, or month is outside 1-12.
    """
    try:
        year_f = float(year)
        month_f = float(month)
    except (TypeError, ValueError) as e:
        raise InvalidDate(f"Non-numeric year/month: {year!r}-{month!r}") from e

    if pd.isna(year_f) or pd.isna(month_f):
        raise InvalidDate(f"Missing year/month: {year!r}-{month!r}")
    if not year_f.is_integer() or not month_f.is_integer():
        raise InvalidDate(f"Non-integral year/month: {year!r}-{month!r}")
    if not 1 <= int(month_f) <= 12:
        raise InvalidDate(f"Month out of range 1-12: {int(month_f)} (year {int(year_f)})")

    return pd.Timestamp(year=int(year_f), month=int(month_f), day=1)


def to_dates(years: pd.Series, months: pd.Series) -> pd.Series:
    """Vectorised to_date over aligned year/month columns."""
    dates = [to_date(y, m) for y, m in zip(years, months)]
    return pd.Series(pd.to_datetime(dates), index=years.index, name="date", dtype="datetime64[ns]")


def decade_of(year: int) -> int:
    """Decade bucket of a calendar year (1987 -> 1980)."""
    return year // 10 * 10
