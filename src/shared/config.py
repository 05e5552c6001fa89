"""Configuration management for the Phillips curve study."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

GRANULARITIES = ("monthly", "quarterly")
REG_DOCTYPES = ("html", "text")
SILVER_FORMATS = ("csv", "parquet")


class Config:
    """Application configuration."""

    # Project paths
    ROOT_DIR = Path(__file__).parent.parent.parent
    DATA_DIR = Path(os.getenv("PC_DATA_DIR", str(ROOT_DIR / "data")))
    LOGS_DIR = ROOT_DIR / "logs"
    OUTPUT_DIR = Path(os.getenv("PC_OUTPUT_DIR", str(ROOT_DIR / "output")))

    # Source files (resolved against DATA_DIR / "raw")
    CASE_STUDY_FILE: str = os.getenv("PC_CASE_STUDY_FILE", "Case_Study_Data.csv")
    FRED_CLF_FILE: str = os.getenv("PC_FRED_CLF_FILE", "FRED_clf.csv")
    FRED_NROU_FILE: str = os.getenv("PC_FRED_NROU_FILE", "FRED_nrou.csv")
    BLS_U6_FILE: str = os.getenv("PC_BLS_U6_FILE", "BLS_U6.csv")

    # Analysis settings
    GRANULARITY: str = os.getenv("PC_GRANULARITY", "monthly")
    REG_DOCTYPE: str = os.getenv("PC_REG_DOCTYPE", "html")
    SILVER_FORMAT: str = os.getenv("PC_SILVER_FORMAT", "parquet")
    LOG_LEVEL: str = os.getenv("PC_LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values."""
        if cls.GRANULARITY not in GRANULARITIES:
            raise ValueError(
                f"PC_GRANULARITY must be one of {GRANULARITIES}, got '{cls.GRANULARITY}'"
            )
        if cls.REG_DOCTYPE not in REG_DOCTYPES:
            raise ValueError(
                f"PC_REG_DOCTYPE must be one of {REG_DOCTYPES}, got '{cls.REG_DOCTYPE}'"
            )
        if cls.SILVER_FORMAT not in SILVER_FORMATS:
            raise ValueError(
                f"PC_SILVER_FORMAT must be one of {SILVER_FORMATS}, got '{cls.SILVER_FORMAT}'"
            )

    @classmethod
    def raw_path(cls, filename: str) -> Path:
        """Path of a raw source file."""
        return cls.DATA_DIR / "raw" / filename


@dataclass(frozen=True)
class AnalysisSettings:
    """Settings threaded explicitly through one analysis run.

    Attributes:
        granularity: "monthly" (merges FRED labor force) or "quarterly".
        output_dir: Directory receiving tables, charts and manifests.
        palette: Chart colors, used in order.
        betas: Expected-inflation response coefficients as (scenario, beta)
            pairs; a mapping is accepted and converted.
        reg_doctype: Regression table format ("html" or "text").
        silver_format: Format of the normalized series written to processed/
            ("csv" or "parquet").
    """

    granularity: str = "monthly"
    output_dir: Path = Path("output")
    palette: tuple[str, ...] = ("#007ab3", "#69c7b1", "#c4a664")
    betas: tuple[tuple[str, float], ...] = (("b1", 0.75), ("b2", 1.5), ("b3", 2.25))
    reg_doctype: str = "html"
    silver_format: str = "parquet"

    def __post_init__(self) -> None:
        # Accept a mapping but store hashable (name, beta) pairs
        object.__setattr__(
            self, "betas", tuple((str(k), float(v)) for k, v in dict(self.betas).items())
        )
        if self.granularity not in GRANULARITIES:
            raise ValueError(
                f"granularity must be one of {GRANULARITIES}, got '{self.granularity}'"
            )
        if self.reg_doctype not in REG_DOCTYPES:
            raise ValueError(
                f"reg_doctype must be one of {REG_DOCTYPES}, got '{self.reg_doctype}'"
            )
        if self.silver_format not in SILVER_FORMATS:
            raise ValueError(
                f"silver_format must be one of {SILVER_FORMATS}, got '{self.silver_format}'"
            )

    @classmethod
    def from_config(cls, **overrides) -> "AnalysisSettings":
        """Build settings from Config defaults, applying keyword overrides."""
        values = {
            "granularity": Config.GRANULARITY,
            "output_dir": Config.OUTPUT_DIR,
            "reg_doctype": Config.REG_DOCTYPE,
            "silver_format": Config.SILVER_FORMAT,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def tables_dir(self) -> Path:
        return self.output_dir / "tables"

    @property
    def charts_dir(self) -> Path:
        return self.output_dir / "charts"

    @property
    def manifests_dir(self) -> Path:
        return self.output_dir / "manifests"


config = Config()
