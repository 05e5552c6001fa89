"""Phillips curve analysis script.

Runs the full study:
1. Load the case-study, FRED and BLS sources (data/raw/)
2. Normalize, compute inflation and U3, join NROU and U6
3. Fit linear and nonlinear regressions per decade
4. Export regression tables, charts and a run manifest (output/)

Usage:
    # Monthly analysis with FRED labor force data (default)
    python scripts/run_phillips_analysis.py

    # Quarterly analysis using only the case-study data
    python scripts/run_phillips_analysis.py --granularity quarterly

    # Plain-text regression tables, no charts
    python scripts/run_phillips_analysis.py --doctype text --no-charts

Example:
    $ python scripts/run_phillips_analysis.py --data-dir data --output-dir output
    [INFO] Preparing Phillips curve data (monthly)
    [INFO] Phillips curve table: 839 rows
    [INFO] Fitted 8/8 linear windows
    [INFO] Fitted 8/8 nonlinear windows
    [INFO] Phillips curve pipeline completed
"""

import argparse
import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

from src.pipelines.phillips.run_phillips_pipeline import SourcePaths, run  # noqa: E402
from src.shared.config import AnalysisSettings, Config  # noqa: E402
from src.shared.exceptions import PhillipsCurveError  # noqa: E402
from src.shared.utils import set_log_level, setup_logger  # noqa: E402


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Test the Phillips curve on US inflation and unemployment data",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    parser.add_argument(
        "--data-dir",
        type=Path,
        help=f"Data root containing raw/ (default: {Config.DATA_DIR})",
        metavar="DIR",
    )

    parser.add_argument(
        "--output-dir",
        type=Path,
        help=f"Directory for tables, charts and manifests (default: {Config.OUTPUT_DIR})",
        metavar="DIR",
    )

    parser.add_argument(
        "--granularity",
        choices=["monthly", "quarterly"],
        help=f"Labor data resolution (default: {Config.GRANULARITY})",
    )

    parser.add_argument(
        "--doctype",
        choices=["html", "text"],
        help=f"Regression table format (default: {Config.REG_DOCTYPE})",
    )

    parser.add_argument(
        "--no-charts",
        action="store_true",
        help="Skip chart rendering",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        help=f"Run log (default: {Config.LOGS_DIR / 'pipelines' / 'phillips.log'})",
        metavar="FILE",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args()


def main() -> int:
    """Main analysis script."""
    args = parse_args()

    # Setup logger
    level = "DEBUG" if args.verbose else Config.LOG_LEVEL
    logger = setup_logger(
        "run_phillips",
        log_file=args.log_file or Config.LOGS_DIR / "pipelines" / "phillips.log",
        level=level,
    )
    set_log_level(level)

    try:
        settings = AnalysisSettings.from_config(
            granularity=args.granularity,
            output_dir=args.output_dir,
            reg_doctype=args.doctype,
        )
    except ValueError as e:
        logger.error("Invalid configuration: %s", e)
        return 1

    sources = SourcePaths.from_config(args.data_dir)
    logger.info("Reading sources from %s", sources.case_study.parent)

    try:
        result = run(settings=settings, sources=sources, render_charts=not args.no_charts)
    except FileNotFoundError as e:
        logger.error("Missing source file: %s", e)
        return 1
    except PhillipsCurveError as e:
        logger.error("Pipeline aborted (%s): %s", type(e).__name__, e)
        return 1

    logger.info("")
    logger.info("=" * 60)
    for name, path in result.tables.items():
        logger.info("  ✓ %s → %s", name, path)
    logger.info("  ✓ %d charts → %s", len(result.charts), settings.charts_dir)
    for window in result.failed_windows:
        logger.warning("  ✗ %s", window)
    logger.info("  Manifest: %s", result.manifest_path)
    logger.info("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
