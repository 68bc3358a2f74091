"""Data models for FAERS Dashboard."""

from faers_dashboard.models.model_fda import FAERSEvent, Sex
from faers_dashboard.models.model_metrics import (
    Metrics,
    SexBreakdown,
    Summary,
    TrendPoint,
)

__all__ = ["FAERSEvent", "Sex", "Metrics", "SexBreakdown", "Summary", "TrendPoint"]
