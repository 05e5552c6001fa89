"""Data preprocessors for Bronze → Silver transformation."""

from src.ingestion.preprocessors.base_preprocessor import BasePreprocessor
from src.ingestion.preprocessors.label_map import DEFAULT_LABEL_MAP, LabelMap
from src.ingestion.preprocessors.series_normalizer import SeriesNormalizer, normalize

__all__ = [
    "BasePreprocessor",
    "DEFAULT_LABEL_MAP",
    "LabelMap",
    "SeriesNormalizer",
    "normalize",
]
