"""
Dashboard state and the fetch -> aggregate -> bucket pipeline.

Every ``search`` or ``filter_change`` re-runs the whole pipeline. Runs may
overlap; each one is tagged with a sequence number and only the most
recently issued run is allowed to update the state.
"""

import logging
from typing import Any, Protocol

from pydantic import BaseModel

from faers_dashboard.dashboard.sources import DashboardFetchError
from faers_dashboard.data_sources.fda import event_results
from faers_dashboard.models.model_metrics import Metrics, TrendPoint
from faers_dashboard.services.aggregator import compute_metrics
from faers_dashboard.services.query_builder import Seriousness, parse_seriousness
from faers_dashboard.services.trends import bucket_by_year

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    async def fetch(
        self, drug_name: str, seriousness: Seriousness | None = None
    ) -> dict[str, Any]: ...


class DashboardState(BaseModel):
    """Everything the presentation layer renders."""

    events: list[dict[str, Any]] = []
    metrics: Metrics = Metrics()
    trend: list[TrendPoint] = []
    error: str | None = None
    is_loading: bool = False
    current_drug: str | None = None
    severity: Seriousness = Seriousness.ALL


class Dashboard:
    """Reacts to search and filter events and keeps DashboardState current."""

    def __init__(self, source: EventSource) -> None:
        self._source = source
        self._latest_seq = 0
        self.state = DashboardState()

    @property
    def latest_sequence(self) -> int:
        return self._latest_seq

    async def search(self, drug_name: str) -> DashboardState:
        """Search for a drug using the current severity filter."""
        self.state.current_drug = drug_name
        return await self._run(drug_name, self.state.severity)

    async def filter_change(self, severity: str | Seriousness) -> DashboardState:
        """Change the severity filter; re-fetch if a drug has been searched."""
        self.state.severity = parse_seriousness(severity)
        if self.state.current_drug is None:
            return self.state
        return await self._run(self.state.current_drug, self.state.severity)

    async def _run(self, drug_name: str, severity: Seriousness) -> DashboardState:
        self._latest_seq += 1
        seq = self._latest_seq
        self.state.is_loading = True
        self.state.error = None

        try:
            data = await self._source.fetch(drug_name, severity)
        except DashboardFetchError as e:
            self._apply(seq, error=str(e))
        else:
            self._apply(seq, events=event_results(data))
        return self.state

    def _apply(
        self,
        seq: int,
        events: list[dict[str, Any]] | None = None,
        error: str | None = None,
    ) -> None:
        if seq != self._latest_seq:
            logger.debug("Discarding stale result seq=%d latest=%d", seq, self._latest_seq)
            return

        events = events or []
        metrics = compute_metrics(events)
        trend = bucket_by_year(events)
        self.state.events = events
        self.state.metrics = metrics
        self.state.trend = trend
        self.state.error = error
        self.state.is_loading = False
