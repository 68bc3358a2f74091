"""
Event sources for the dashboard pipeline.

ProxyClient mirrors what the browser does: one GET per user action against
the dashboard's own endpoint, with the server's ``error`` string surfaced
verbatim when the call fails. DirectSource runs the proxy in-process.
"""

import asyncio
import json
import logging
from typing import Any

import aiohttp

from faers_dashboard.constants import (
    ADVERSE_EVENTS_PATH,
    ERROR_FETCH_FAILED,
    ERROR_UPSTREAM_FAILED,
)
from faers_dashboard.data_sources.base_client import (
    BaseClient,
    ClientConfig,
    UpstreamError,
)
from faers_dashboard.services.proxy import AdverseEventProxy, ValidationError
from faers_dashboard.services.query_builder import Seriousness

logger = logging.getLogger("faers_dashboard.dashboard")


class DashboardFetchError(Exception):
    """A fetch failed; the message is safe to show to the user."""

    pass


class ProxyClient(BaseClient):
    """Talks to ``GET /api/adverse-events`` on a running dashboard server."""

    def __init__(self, api_base_url: str, config: ClientConfig | None = None) -> None:
        super().__init__(config)
        self._url = api_base_url.rstrip("/") + ADVERSE_EVENTS_PATH

    @property
    def _source_name(self) -> str:
        return "proxy"

    @staticmethod
    def _build_params(
        drug_name: str, seriousness: Seriousness | None
    ) -> dict[str, str]:
        params = {"drugName": drug_name}
        if seriousness and seriousness is not Seriousness.ALL:
            params["seriousness"] = seriousness.value
        return params

    async def fetch(
        self, drug_name: str, seriousness: Seriousness | None = None
    ) -> dict[str, Any]:
        """Return the proxy's JSON body, or raise DashboardFetchError."""
        params = self._build_params(drug_name, seriousness)
        try:
            session = await self._get_session()
            resp = await session.get(self._url, params=params)
            raw = await resp.text()
        except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as e:
            logger.warning("Proxy request failed: %s", e)
            raise DashboardFetchError(ERROR_FETCH_FAILED) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            data = None

        if resp.status >= 300:
            message = data.get("error") if isinstance(data, dict) else None
            raise DashboardFetchError(message or ERROR_FETCH_FAILED)
        if not isinstance(data, dict):
            raise DashboardFetchError(ERROR_FETCH_FAILED)
        return data


class DirectSource:
    """Runs AdverseEventProxy in-process, for use without a server."""

    def __init__(self, proxy: AdverseEventProxy) -> None:
        self._proxy = proxy

    async def fetch(
        self, drug_name: str, seriousness: Seriousness | None = None
    ) -> dict[str, Any]:
        try:
            return await self._proxy.fetch(
                drug_name, seriousness.value if seriousness else None
            )
        except ValidationError as e:
            raise DashboardFetchError(str(e)) from e
        except UpstreamError as e:
            raise DashboardFetchError(ERROR_UPSTREAM_FAILED) from e
