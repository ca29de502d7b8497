"""Material-point analysis drivers."""

from smeared_concrete.analysis.history import (
    HistoryPoint,
    HistoryResult,
    StrainHistoryAnalysis,
)

__all__ = ["HistoryPoint", "HistoryResult", "StrainHistoryAnalysis"]
