"""Unit tests for the Dashboard pipeline."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from faers_dashboard.dashboard import Dashboard, DashboardFetchError
from faers_dashboard.models.model_metrics import Metrics
from faers_dashboard.services.query_builder import Seriousness


def _source(return_value=None, side_effect=None) -> MagicMock:
    source = MagicMock()
    source.fetch = AsyncMock(return_value=return_value, side_effect=side_effect)
    return source


class GatedSource:
    """Event source whose calls complete only when the test releases them."""

    def __init__(self, payloads: dict[Seriousness, dict]):
        self.payloads = payloads
        self.gates: list[asyncio.Event] = []

    async def fetch(self, drug_name, seriousness=None):
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return self.payloads[seriousness]


async def _settle():
    for _ in range(5):
        await asyncio.sleep(0)


@pytest.mark.asyncio
class TestDashboard:
    """Unit tests for search, filter_change and state updates."""

    async def test_search_populates_state(self, sample_payload):
        """Test that a search fills events, metrics and trend."""
        source = _source(return_value=sample_payload)
        dashboard = Dashboard(source)

        state = await dashboard.search("DURAGESIC-100")

        assert state.current_drug == "DURAGESIC-100"
        assert state.events == sample_payload["results"]
        assert state.metrics.total == 4
        assert [p.year for p in state.trend] == ["2019", "2021", "2022"]
        assert state.error is None
        assert state.is_loading is False
        source.fetch.assert_awaited_once_with("DURAGESIC-100", Seriousness.ALL)

    async def test_filter_change_before_search_does_not_fetch(self):
        """Test that changing the filter with no drug only records it."""
        source = _source(return_value={})
        dashboard = Dashboard(source)

        state = await dashboard.filter_change("Death")

        assert state.severity is Seriousness.DEATH
        source.fetch.assert_not_awaited()

    async def test_filter_change_refetches_current_drug(self, sample_payload):
        """Test that a filter change re-runs the pipeline for the last drug."""
        source = _source(return_value=sample_payload)
        dashboard = Dashboard(source)
        await dashboard.search("aspirin")

        await dashboard.filter_change("Hospitalization")

        source.fetch.assert_awaited_with("aspirin", Seriousness.HOSPITALIZATION)
        assert source.fetch.await_count == 2

    async def test_search_uses_selected_filter(self):
        """Test that a new search keeps the currently selected filter."""
        source = _source(return_value={})
        dashboard = Dashboard(source)
        await dashboard.filter_change("Death")

        await dashboard.search("aspirin")

        source.fetch.assert_awaited_once_with("aspirin", Seriousness.DEATH)

    async def test_failure_resets_to_empty(self, sample_payload):
        """Test that a failed fetch clears stale data and sets the error."""
        source = _source(return_value=sample_payload)
        dashboard = Dashboard(source)
        await dashboard.search("aspirin")

        source.fetch.side_effect = DashboardFetchError("Failed to fetch data from OpenFDA")
        state = await dashboard.filter_change("Death")

        assert state.error == "Failed to fetch data from OpenFDA"
        assert state.events == []
        assert state.metrics == Metrics()
        assert state.trend == []
        assert state.is_loading is False

    async def test_success_after_failure_clears_error(self, sample_payload):
        """Test that the error message is cleared by the next good fetch."""
        source = _source(side_effect=DashboardFetchError("Drug name is required"))
        dashboard = Dashboard(source)
        await dashboard.search("")

        source.fetch.side_effect = None
        source.fetch.return_value = sample_payload
        state = await dashboard.search("aspirin")

        assert state.error is None
        assert state.metrics.total == 4

    async def test_missing_results_key_gives_empty_state(self):
        """Test that a body without results is treated as no events."""
        dashboard = Dashboard(_source(return_value={"meta": {}}))

        state = await dashboard.search("aspirin")

        assert state.events == []
        assert state.metrics == Metrics()

    async def test_stale_response_is_discarded(self):
        """Test that an older run finishing last does not overwrite newer state."""
        all_payload = {"results": [{"receivedate": "20200101"}] * 3}
        death_payload = {"results": [{"receivedate": "20210101", "seriousnessdeath": "1"}]}
        source = GatedSource(
            {Seriousness.ALL: all_payload, Seriousness.DEATH: death_payload}
        )
        dashboard = Dashboard(source)

        first = asyncio.create_task(dashboard.search("aspirin"))
        await _settle()
        second = asyncio.create_task(dashboard.filter_change("Death"))
        await _settle()
        assert dashboard.latest_sequence == 2

        source.gates[1].set()
        await second
        assert dashboard.state.metrics.deaths == 1

        source.gates[0].set()
        await first

        assert dashboard.state.metrics.total == 1
        assert dashboard.state.metrics.deaths == 1
        assert [p.year for p in dashboard.state.trend] == ["2021"]
        assert dashboard.state.is_loading is False

    async def test_stale_failure_is_discarded(self):
        """Test that an older run failing last does not clear newer results."""
        payload = {"results": [{"receivedate": "20200101"}]}
        calls = 0
        release_first = asyncio.Event()

        async def fetch(drug_name, seriousness=None):
            nonlocal calls
            calls += 1
            if calls == 1:
                await release_first.wait()
                raise DashboardFetchError("Failed to fetch data")
            return payload

        source = MagicMock()
        source.fetch = fetch
        dashboard = Dashboard(source)

        first = asyncio.create_task(dashboard.search("aspirin"))
        await _settle()
        await dashboard.search("aspirin")
        release_first.set()
        await first

        assert dashboard.state.error is None
        assert dashboard.state.metrics.total == 1

    async def test_oddly_typed_results_update_state_consistently(self):
        """Test that unusual field types still produce a complete state update."""
        payload = {
            "results": [
                {"safetyreportid": 1, "receivedate": 20210304, "seriousnessdeath": "1"},
                {"patient": {"drug": [None]}},
            ]
        }
        dashboard = Dashboard(_source(return_value=payload))

        state = await dashboard.search("aspirin")

        assert state.events == payload["results"]
        assert state.metrics.total == 2
        assert state.metrics.deaths == 1
        assert [(p.year, p.count) for p in state.trend] == [("2021", 1)]
        assert state.is_loading is False
        assert state.error is None

    async def test_results_not_a_list_gives_empty_state(self):
        """Test that a non-list results value is treated as no events."""
        dashboard = Dashboard(_source(return_value={"results": {"unexpected": True}}))

        state = await dashboard.search("aspirin")

        assert state.events == []
        assert state.metrics == Metrics()
        assert state.is_loading is False
