"""Data ingestion module - source loaders and preprocessors."""

from src.ingestion.loaders import (
    BaseLoader,
    BLSWideLoader,
    CaseStudyLoader,
    FredSeriesLoader,
)
from src.ingestion.preprocessors import DEFAULT_LABEL_MAP, LabelMap, SeriesNormalizer

__all__ = [
    "BaseLoader",
    "BLSWideLoader",
    "CaseStudyLoader",
    "DEFAULT_LABEL_MAP",
    "FredSeriesLoader",
    "LabelMap",
    "SeriesNormalizer",
]
