"""Reporting: regression tables and charts."""

from src.reporting.regression_tables import (
    coefficients_frame,
    export_regression_table,
    regression_table,
)

__all__ = ["coefficients_frame", "export_regression_table", "regression_table"]
