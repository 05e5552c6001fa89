"""Regression table export.

Builds one multi-column table per model kind (one column per period window)
with statsmodels' ``summary_col`` and writes it as HTML or plain text.
A machine-readable CSV of the same estimates is written alongside.

Windows whose fit failed get no column; they are listed in a note under the
table so the report never shows a placeholder model.
"""

from pathlib import Path

import pandas as pd
from statsmodels.iolib.summary2 import summary_col

from src.analysis.regression import WindowFit
from src.shared.config import AnalysisSettings
from src.shared.utils import setup_logger

logger = setup_logger(__name__)

COVARIATE_LABELS: dict[str, str] = {
    "u3": "U3 Unemployment Rate",
    "u3_sq": "Square of U3",
    "nrou": "Natural Rate of Unemployment",
    "nrou_sq": "Square of Natural Rate",
    "u6": "U6 Unemployment Rate",
    "u6_sq": "Square of U6",
    "const": "Constant",
}

DEP_VAR_LABEL = "Inflation Rate"


def regression_table(fits: list[WindowFit], title: str, doctype: str = "html") -> str:
    """Render window fits as a side-by-side regression table.

    Args:
        fits: Window results, in column order.
        title: Table caption.
        doctype: "html" or "text".

    Returns:
        Rendered table.

    Raises:
        ValueError: If doctype is unknown or no window was fitted.
    """
    if doctype not in ("html", "text"):
        raise ValueError(f"Invalid doctype '{doctype}'. Must be 'html' or 'text'.")

    fitted = [fit for fit in fits if fit.ok]
    if not fitted:
        raise ValueError(f"No successful fits to tabulate for '{title}'")

    regressor = fitted[0].model.regressor
    order = [regressor, f"{regressor}_sq", "const"]

    summary = summary_col(
        [fit.model.results for fit in fitted],
        model_names=[fit.label for fit in fitted],
        stars=True,
        float_format="%0.3f",
        info_dict={"N": lambda res: f"{int(res.nobs)}"},
        regressor_order=order,
        drop_omitted=False,
    )
    table = summary.tables[0]
    table.index = [COVARIATE_LABELS.get(name, name) for name in table.index]

    summary.add_title(f"{title} (dependent variable: {DEP_VAR_LABEL})")

    failed = [fit for fit in fits if not fit.ok]
    if failed:
        notes = "; ".join(f"{fit.label}: {fit.error}" for fit in failed)
        summary.add_text(f"Windows without a fit: {notes}")

    return summary.as_html() if doctype == "html" else summary.as_text()


def coefficients_frame(fits: list[WindowFit]) -> pd.DataFrame:
    """One row per window with estimates, standard errors, R² and status."""
    records = []
    for fit in fits:
        record = {
            "window": fit.label,
            "period_start": fit.period_start,
            "period_end": fit.period_end,
            "status": "ok" if fit.ok else "failed",
            "error": fit.error,
        }
        if fit.ok:
            model = fit.model
            record.update({"kind": model.kind, "nobs": model.nobs, "rsquared": model.rsquared})
            for name, value in model.params.items():
                record[f"coef_{name}"] = value
                record[f"se_{name}"] = model.bse[name]
        records.append(record)
    return pd.DataFrame.from_records(records)


def export_regression_table(
    fits: list[WindowFit],
    title: str,
    name: str,
    settings: AnalysisSettings,
) -> Path:
    """Write a regression table and its CSV companion to the tables directory.

    File path: {tables_dir}/{name}.htm (html) or {name}.txt (text)

    Returns:
        Path to the rendered table.
    """
    settings.tables_dir.mkdir(parents=True, exist_ok=True)

    suffix = ".htm" if settings.reg_doctype == "html" else ".txt"
    path = settings.tables_dir / f"{name}{suffix}"
    path.write_text(regression_table(fits, title, settings.reg_doctype), encoding="utf-8")

    csv_path = settings.tables_dir / f"{name}.csv"
    coefficients_frame(fits).to_csv(csv_path, index=False, encoding="utf-8")

    logger.info("Exported regression table %s (%d windows)", path, len(fits))
    return path
