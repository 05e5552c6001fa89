"""End-to-end tests for the Phillips curve pipeline on synthetic sources."""

import json

import pandas as pd
import pytest

from src.pipelines.phillips.run_phillips_pipeline import (
    PipelineResult,
    SourcePaths,
    prepare_auxiliary,
    run,
)
from src.shared.config import AnalysisSettings
from src.shared.exceptions import EmptyJoinResult, MissingAuxiliarySource, UnrecognizedSeriesLabel


@pytest.fixture
def settings(tmp_path):
    return AnalysisSettings(output_dir=tmp_path / "output")


class TestMonthlyRun:
    @pytest.fixture
    def result(self, write_sources, settings) -> PipelineResult:
        sources = SourcePaths.from_config(write_sources())
        return run(settings=settings, sources=sources, render_charts=False)

    def test_pc_table(self, result):
        assert list(result.pc.columns) == ["date", "inflation", "u3"]
        # 1948-01 through 2017-12, minus the first month
        assert len(result.pc) == 70 * 12 - 1
        assert result.pc["date"].is_monotonic_increasing

    def test_uses_monthly_labor_force(self, result):
        # Every month has a u3 value, not only the quarterly CLF months
        assert set(result.pc["date"].dt.month) == set(range(1, 13))

    def test_joins(self, result):
        assert len(result.pc_nrou) == len(result.pc)
        assert result.pc_u6["date"].min() == pd.Timestamp("1994-01-01")
        assert {"infl_exp_b1", "infl_exp_b2", "infl_exp_b3"} <= set(result.pc_infl_exp.columns)

    def test_all_windows_fitted(self, result):
        assert [f.label for f in result.linear_fits][-1] == "Full"
        assert all(f.ok for f in result.linear_fits + result.nonlinear_fits)
        assert result.failed_windows == []

    def test_unemployment_fit(self, result):
        assert result.unemployment_fit is not None
        assert result.unemployment_fit.response == "u3"
        assert result.unemployment_fit.regressor == "u6"

    def test_tables_written(self, result, settings):
        assert result.tables["pc_linear_reg_table"] == settings.tables_dir / "pc_linear_reg_table.htm"
        assert result.tables["pc_nonlinear_reg_table"].exists()

    def test_silver_series_written(self, result, tmp_path):
        processed = tmp_path / "data" / "processed"

        assert set(result.silver) == {"primary", "nrou", "u6"}
        assert result.silver["primary"] == processed / "series_primary_1948-01_2017-12.parquet"
        assert all(path.exists() for path in result.silver.values())

        primary = pd.read_parquet(result.silver["primary"])
        assert list(primary.columns) == ["date", "field", "value"]
        assert set(primary["field"]) == {"cpi", "civ_labor_force", "unemp_level"}

    def test_manifest(self, result):
        manifest = json.loads(result.manifest_path.read_text())

        assert manifest["pipeline"] == "phillips_curve"
        assert manifest["granularity"] == "monthly"
        assert manifest["rows"]["pc"] == len(result.pc)
        assert len(manifest["windows"]["linear"]) == 8
        assert manifest["failed_windows"] == []
        assert manifest["charts"] == {}
        assert set(manifest["silver"]) == {"primary", "nrou", "u6"}


def test_quarterly_run(write_sources, tmp_path):
    settings = AnalysisSettings(granularity="quarterly", output_dir=tmp_path / "output")
    sources = SourcePaths.from_config(write_sources())

    result = run(settings=settings, sources=sources, render_charts=False)

    # Labor force only reported in Jan/Apr/Jul/Oct
    assert set(result.pc["date"].dt.month) == {1, 4, 7, 10}
    assert len(result.pc) == 70 * 4 - 1
    assert all(f.ok for f in result.linear_fits)


def test_narrow_range_reports_failed_windows(write_sources, settings):
    sources = SourcePaths.from_config(write_sources(1950, 1955))

    # No U6 data before 1994
    with pytest.warns(EmptyJoinResult):
        result = run(settings=settings, sources=sources, render_charts=False)

    ok = {f.label for f in result.linear_fits if f.ok}
    assert ok == {"1950s", "Full"}
    assert "linear:1960s" in result.failed_windows
    assert "nonlinear:2010s" in result.failed_windows
    assert result.unemployment_fit is None
    assert "u6" not in result.silver

    manifest = json.loads(result.manifest_path.read_text())
    statuses = {w["label"]: w["status"] for w in manifest["windows"]["linear"]}
    assert statuses["1950s"] == "ok"
    assert statuses["1970s"] == "failed"
    assert result.tables["pc_linear_reg_table"].exists()


def test_optional_sources_skipped(write_sources, settings):
    data_dir = write_sources(1990, 1999)
    sources = SourcePaths(
        case_study=data_dir / "raw" / "Case_Study_Data.csv",
        fred_clf=data_dir / "raw" / "FRED_clf.csv",
    )

    result = run(settings=settings, sources=sources, render_charts=False)

    assert result.pc_nrou is None
    assert result.pc_infl_exp is None
    assert result.pc_u6 is None
    assert result.silver == {}


def test_monthly_without_labor_force_aborts(write_sources, settings):
    data_dir = write_sources(1990, 1999)
    sources = SourcePaths(case_study=data_dir / "raw" / "Case_Study_Data.csv")

    with pytest.raises(MissingAuxiliarySource):
        run(settings=settings, sources=sources, render_charts=False)


def test_unknown_label_aborts(write_sources, settings):
    data_dir = write_sources(1990, 1999)
    case_study = data_dir / "raw" / "Case_Study_Data.csv"
    with open(case_study, "a", encoding="utf-8") as f:
        f.write("1999,12,Labor Force Participation Rate,67.1\n")

    with pytest.raises(UnrecognizedSeriesLabel, match="Labor Force Participation Rate"):
        run(settings=settings, sources=SourcePaths.from_config(data_dir), render_charts=False)


def test_missing_source_file(tmp_path, settings):
    sources = SourcePaths.from_config(tmp_path / "nowhere")

    with pytest.raises(FileNotFoundError):
        run(settings=settings, sources=sources, render_charts=False)


def test_charts_rendered(write_sources, settings):
    sources = SourcePaths.from_config(write_sources(1990, 2017))

    result = run(settings=settings, sources=sources, render_charts=True)

    assert "pc_full" in result.charts
    assert "infl_exp_nrou_full" in result.charts
    assert "pc_u6" in result.charts
    assert all(path.exists() for path in result.charts.values())
    manifest = json.loads(result.manifest_path.read_text())
    assert set(manifest["charts"]) == set(result.charts)


def test_prepare_auxiliary_unknown_name(tmp_path):
    with pytest.raises(ValueError, match="gdp"):
        prepare_auxiliary(tmp_path / "x.csv", "gdp")


def test_silver_csv_format(write_sources, tmp_path):
    settings = AnalysisSettings(output_dir=tmp_path / "output", silver_format="csv")
    sources = SourcePaths.from_config(write_sources(1990, 1999))

    result = run(settings=settings, sources=sources, render_charts=False)

    assert result.silver["nrou"].name == "series_nrou_1990-01_1999-12.csv"
    nrou = pd.read_csv(result.silver["nrou"])
    assert list(nrou.columns) == ["date", "nrou"]
