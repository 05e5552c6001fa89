"""Shared utilities and configuration."""

from src.shared.config import AnalysisSettings, Config
from src.shared.utils import decade_of, setup_logger, to_date

__all__ = ["AnalysisSettings", "Config", "setup_logger", "to_date", "decade_of"]
