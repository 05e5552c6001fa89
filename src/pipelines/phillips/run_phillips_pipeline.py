"""
Phillips Curve Pipeline Runner (RAW → CLEAN → MODELS → REPORT)
Inflation vs. unemployment, United States 1947-2017
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from src.analysis.expectations import expected_inflation
from src.analysis.joiner import join_on_date
from src.analysis.periods import DECADE_WINDOWS
from src.analysis.rates import compute_rates
from src.analysis.regression import LINEAR, NONLINEAR, FittedModel, WindowFit, fit_ols, fit_windows
from src.analysis.validate import check_missing_values
from src.ingestion.loaders import BLSWideLoader, CaseStudyLoader, FredSeriesLoader
from src.ingestion.preprocessors import DEFAULT_LABEL_MAP, LabelMap, SeriesNormalizer
from src.reporting import charts
from src.reporting.regression_tables import export_regression_table
from src.shared.config import AnalysisSettings, Config
from src.shared.exceptions import InsufficientData
from src.shared.utils import setup_logger

logger = setup_logger(__name__)


# -------------------------------------------------------------------
# Inputs / outputs
# -------------------------------------------------------------------

@dataclass(frozen=True)
class SourcePaths:
    case_study: Path
    fred_clf: Path | None = None
    fred_nrou: Path | None = None
    bls_u6: Path | None = None
    processed_dir: Path | None = None

    @classmethod
    def from_config(cls, data_dir: Path | None = None) -> "SourcePaths":
        raw_dir = (data_dir or Config.DATA_DIR) / "raw"
        return cls(
            case_study=raw_dir / Config.CASE_STUDY_FILE,
            fred_clf=raw_dir / Config.FRED_CLF_FILE,
            fred_nrou=raw_dir / Config.FRED_NROU_FILE,
            bls_u6=raw_dir / Config.BLS_U6_FILE,
            processed_dir=(data_dir or Config.DATA_DIR) / "processed",
        )


@dataclass
class PipelineResult:
    pc: pd.DataFrame
    pc_nrou: pd.DataFrame | None = None
    pc_infl_exp: pd.DataFrame | None = None
    pc_u6: pd.DataFrame | None = None
    linear_fits: list[WindowFit] = field(default_factory=list)
    nonlinear_fits: list[WindowFit] = field(default_factory=list)
    unemployment_fit: FittedModel | None = None
    tables: dict[str, Path] = field(default_factory=dict)
    silver: dict[str, Path] = field(default_factory=dict)
    charts: dict[str, Path] = field(default_factory=dict)
    manifest_path: Path | None = None

    @property
    def failed_windows(self) -> list[str]:
        return [f"{LINEAR}:{fit.label}" for fit in self.linear_fits if not fit.ok] + [
            f"{NONLINEAR}:{fit.label}" for fit in self.nonlinear_fits if not fit.ok
        ]


# -------------------------------------------------------------------
# Stages
# -------------------------------------------------------------------

def normalize_primary(
    sources: SourcePaths,
    settings: AnalysisSettings,
    label_map: LabelMap = DEFAULT_LABEL_MAP,
) -> pd.DataFrame:
    """Load the primary source (and monthly labor force) as Silver rows [date, field, value]."""
    normalizer = SeriesNormalizer()

    raw = CaseStudyLoader(sources.case_study).load()
    labor_force = None
    if settings.granularity == "monthly" and sources.fred_clf is not None:
        labor_force = FredSeriesLoader(sources.fred_clf, "CLF16OV").load()

    return normalizer.normalize(raw, label_map, settings.granularity, labor_force=labor_force)


def prepare_auxiliary(path: Path, name: str) -> pd.DataFrame:
    """Load and normalize an auxiliary series (nrou from FRED, u6 from BLS)."""
    normalizer = SeriesNormalizer()
    if name == "nrou":
        return normalizer.normalize_auxiliary(FredSeriesLoader(path, "NROU").load(), name)
    if name == "u6":
        return normalizer.normalize_wide(BLSWideLoader(path).load(), name)
    raise ValueError(f"Unknown auxiliary series '{name}'")


def export_silver(
    frames: dict[str, pd.DataFrame],
    processed_dir: Path,
    format: str = "parquet",
) -> dict[str, Path]:
    """Write normalized series to the Silver layer (one file per identifier).

    Empty frames are skipped.
    """
    normalizer = SeriesNormalizer(output_dir=processed_dir)
    paths = {}
    for identifier, df in frames.items():
        if df.empty:
            logger.warning("Skipping Silver export of empty series '%s'", identifier)
            continue
        paths[identifier] = normalizer.export(df, identifier, format=format)
    return paths


def _render_charts(result: PipelineResult, settings: AnalysisSettings) -> dict[str, Path]:
    out = settings.charts_dir
    pc = result.pc
    figures = {
        "infl_u3": charts.plot_rates_over_time(pc, settings, (1948, 2017)),
        "inflation": charts.plot_series(
            pc, "inflation", settings, "Inflation Over Time", "Inflation", (1948, 2017)
        ),
        "u3": charts.plot_series(
            pc, "u3", settings, "U3 Unemployment Rate Over Time", "U3 Unemployment Rate",
            (1948, 2017), points=True,
        ),
        "infl_decades": charts.plot_decades(pc, "inflation", settings, "Inflation Over Time", "Inflation Rate"),
        "unemp_decades": charts.plot_decades(
            pc, "u3", settings, "Unemployment Over Time", "Unemployment Rate (U3)"
        ),
    }
    for label, period in (("full", (1949, 2017)), ("60s", (1960, 1969)),
                          ("80s", (1980, 1989)), ("00s", (2000, 2017))):
        figures[f"pc_{label}"] = charts.plot_phillips_curve(pc, settings, period=period)

    if result.pc_nrou is not None:
        figures["nrou"] = charts.plot_series(
            result.pc_nrou, "nrou", settings, "Natural Rate of Unemployment Over Time",
            "Natural Rate of Unemployment", (1949, 2017), points=True,
        )
        figures["pc_nrou_full"] = charts.plot_phillips_curve(
            result.pc_nrou, settings, regressor="nrou", period=(1949, 2017),
            title="Modified Phillips Curve", xlabel="Natural Rate of Unemployment",
        )
    if result.pc_infl_exp is not None:
        for label, period in (("60s", (1960, 1969)), ("80s", (1980, 1989)), ("full", (1949, 2017))):
            figures[f"infl_exp_nrou_{label}"] = charts.plot_expected_inflation(
                result.pc_infl_exp, settings, period=period
            )
    if result.pc_u6 is not None:
        figures["u6"] = charts.plot_series(
            result.pc_u6, "u6", settings, "U6 Unemployment Rate Over Time",
            "U6 Unemployment Rate", (2009, 2017), caption=charts.SOURCES_BLS, points=True,
        )
        figures["unemployment"] = charts.plot_unemployment_comparison(result.pc_u6, settings)
        figures["pc_u6"] = charts.plot_phillips_curve(
            result.pc_u6, settings, regressor="u6", period=(2009, 2017),
            title="Phillips Curve Using U6 Unemployment Rate", xlabel="U6 Unemployment Rate",
            caption=charts.SOURCES_BLS,
        )

    return {name: charts.save_figure(fig, out / f"plot_{name}.png") for name, fig in figures.items()}


# -------------------------------------------------------------------
# Pipeline
# -------------------------------------------------------------------

def run(
    settings: AnalysisSettings | None = None,
    sources: SourcePaths | None = None,
    label_map: LabelMap = DEFAULT_LABEL_MAP,
    render_charts: bool = True,
) -> PipelineResult:
    """
    Run the full study.

    Structural data faults (labels, dates, missing sources, ordering) abort
    the run. A regression window without enough data is reported in the
    manifest next to the successful windows.
    """
    settings = settings or AnalysisSettings.from_config()
    sources = sources or SourcePaths.from_config()

    settings.output_dir.mkdir(parents=True, exist_ok=True)
    settings.manifests_dir.mkdir(parents=True, exist_ok=True)

    # ---------------------------------------------------------------
    # Primary table (RAW → CLEAN)
    # ---------------------------------------------------------------

    logger.info("Preparing Phillips curve data (%s)", settings.granularity)
    rows = normalize_primary(sources, settings, label_map)
    result = PipelineResult(pc=compute_rates(SeriesNormalizer.to_wide(rows)))
    silver = {"primary": rows}
    logger.info("Phillips curve table: %d rows", len(result.pc))

    # ---------------------------------------------------------------
    # Auxiliary joins
    # ---------------------------------------------------------------

    if sources.fred_nrou is not None:
        nrou = prepare_auxiliary(sources.fred_nrou, "nrou")
        silver["nrou"] = nrou
        result.pc_nrou = join_on_date(result.pc, nrou)
        if not result.pc_nrou.empty:
            result.pc_infl_exp = expected_inflation(result.pc_nrou, dict(settings.betas))

    if sources.bls_u6 is not None:
        u6 = prepare_auxiliary(sources.bls_u6, "u6")
        silver["u6"] = u6
        result.pc_u6 = join_on_date(result.pc, u6)

    # ---------------------------------------------------------------
    # Silver export
    # ---------------------------------------------------------------

    if sources.processed_dir is not None:
        result.silver = export_silver(silver, sources.processed_dir, settings.silver_format)

    # ---------------------------------------------------------------
    # Models
    # ---------------------------------------------------------------

    result.linear_fits = fit_windows(result.pc, DECADE_WINDOWS, kind=LINEAR)
    result.nonlinear_fits = fit_windows(result.pc, DECADE_WINDOWS, kind=NONLINEAR)

    if result.pc_u6 is not None:
        try:
            result.unemployment_fit = fit_ols(result.pc_u6, response="u3", regressor="u6")
        except InsufficientData as e:
            logger.warning("U3 on U6 regression failed: %s", e)

    # ---------------------------------------------------------------
    # Report
    # ---------------------------------------------------------------

    for name, title, fits in (
        ("pc_linear_reg_table", "Linear Phillips Curve Regressions by Decade, 1950-2017",
         result.linear_fits),
        ("pc_nonlinear_reg_table", "Nonlinear Phillips Curve Regressions by Decade, 1950-2017",
         result.nonlinear_fits),
    ):
        if any(fit.ok for fit in fits):
            result.tables[name] = export_regression_table(fits, title, name, settings)
        else:
            logger.error("No window could be fitted for %s", name)

    if render_charts:
        result.charts = _render_charts(result, settings)

    # ---------------------------------------------------------------
    # Manifest
    # ---------------------------------------------------------------

    run_time_utc = datetime.now(timezone.utc).isoformat()

    manifest = {
        "run_time_utc": run_time_utc,
        "pipeline": "phillips_curve",
        "granularity": settings.granularity,
        "rows": {
            "pc": len(result.pc),
            "pc_nrou": None if result.pc_nrou is None else len(result.pc_nrou),
            "pc_u6": None if result.pc_u6 is None else len(result.pc_u6),
        },
        "quality": check_missing_values(result.pc),
        "windows": {
            LINEAR: [fit.to_dict() for fit in result.linear_fits],
            NONLINEAR: [fit.to_dict() for fit in result.nonlinear_fits],
        },
        "unemployment_fit": (
            None if result.unemployment_fit is None else result.unemployment_fit.to_dict()
        ),
        "failed_windows": result.failed_windows,
        "silver": {k: str(v) for k, v in result.silver.items()},
        "tables": {k: str(v) for k, v in result.tables.items()},
        "charts": {k: str(v) for k, v in result.charts.items()},
    }

    manifest_path = settings.manifests_dir / f"phillips_run_{run_time_utc.replace(':', '-')}.json"
    with open(manifest_path, "w") as f:
        json.dump(manifest, f, indent=2)
    result.manifest_path = manifest_path

    if result.failed_windows:
        logger.warning("Windows without a fit: %s", ", ".join(result.failed_windows))
    logger.info("Phillips curve pipeline completed (manifest: %s)", manifest_path)
    return result


if __name__ == "__main__":
    run()
