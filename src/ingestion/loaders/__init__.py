"""Raw source loaders (Bronze layer)."""

from src.ingestion.loaders.base_loader import BaseLoader
from src.ingestion.loaders.bls_loader import BLSWideLoader
from src.ingestion.loaders.case_study_loader import CaseStudyLoader
from src.ingestion.loaders.fred_loader import FredSeriesLoader

__all__ = [
    "BaseLoader",
    "BLSWideLoader",
    "CaseStudyLoader",
    "FredSeriesLoader",
]
