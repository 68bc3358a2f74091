"""
Base client for external HTTP data sources.

Provides: aiohttp session lifecycle, a single-attempt JSON GET, structured
request logging, and the exception hierarchy used to report upstream failures.
There is deliberately no retry, caching or rate limiting: every call is one
request, and every failure is reported to the caller immediately.
"""

import asyncio
import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
from pydantic import BaseModel

from faers_dashboard.constants import DEFAULT_TIMEOUT

logger = logging.getLogger("faers_dashboard.data_sources")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ClientConfig(BaseModel):
    """Connection settings shared by every client."""

    timeout_seconds: float = DEFAULT_TIMEOUT


# ---------------------------------------------------------------------------
# Request context (for structured logging)
# ---------------------------------------------------------------------------


class RequestContext(BaseModel):
    """Metadata attached to every outgoing request for logging."""

    source: str  # e.g. "openfda", "proxy"
    method: str  # e.g. "get_event_payload"
    params: dict[str, Any] = {}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class DataSourceError(Exception):
    """Base exception for data source failures."""

    def __init__(self, source: str, message: str, status_code: int | None = None):
        self.source = source
        self.status_code = status_code
        super().__init__(f"[{source}] {message}")


class UpstreamError(DataSourceError):
    """Raised when the provider is unreachable or answers with a non-2xx status."""

    pass


class ParseError(UpstreamError):
    """Raised when the provider answers 2xx with a body that is not a JSON object."""

    pass


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------


class BaseClient(ABC):
    """
    Abstract base for the openFDA client and the dashboard's proxy client.

    Subclasses implement `_source_name` and their own typed methods that
    call `_rest_get()`.
    """

    def __init__(self, config: ClientConfig | None = None):
        self.config = config or ClientConfig()
        self._session: aiohttp.ClientSession | None = None

    @property
    @abstractmethod
    def _source_name(self) -> str:
        """Identifier for this data source, e.g. 'openfda'."""
        ...

    # -- Session management --------------------------------------------------

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.close()

    # -- Single-attempt GET --------------------------------------------------

    async def _rest_get(
        self,
        url: str,
        params: dict[str, Any],
        *,
        context: RequestContext | None = None,
    ) -> dict[str, Any]:
        """
        Issue one GET request and return the decoded JSON object.

        Parameters
        ----------
        url : str
            Full URL, without the query string.
        params : dict
            Query string parameters.
        context : RequestContext, optional
            Logging context.

        Raises
        ------
        UpstreamError
            Non-2xx status, connection failure or timeout.
        ParseError
            2xx status with a body that is not a JSON object.
        """
        ctx = context or RequestContext(source=self._source_name, method="unknown")
        start = time.monotonic()

        logger.info("Request [%s.%s] url=%s", ctx.source, ctx.method, url)

        try:
            session = await self._get_session()
            resp = await session.get(url, params=params)

            if resp.status >= 300:
                body = await resp.text(errors="replace")
                logger.warning(
                    "HTTP %d from %s.%s: %s",
                    resp.status,
                    ctx.source,
                    ctx.method,
                    body[:200],
                )
                raise UpstreamError(
                    ctx.source,
                    f"HTTP {resp.status}: {body[:500]}",
                    status_code=resp.status,
                )

            raw = await resp.text()

        except UnicodeDecodeError as e:
            raise ParseError(
                ctx.source, f"Undecodable body: {e}", status_code=resp.status
            ) from e

        except asyncio.TimeoutError:
            elapsed = time.monotonic() - start
            raise UpstreamError(ctx.source, f"Timeout after {elapsed:.1f}s")

        except aiohttp.ClientError as e:
            raise UpstreamError(ctx.source, f"Connection error: {e}") from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise ParseError(
                ctx.source, f"Malformed JSON: {e}", status_code=resp.status
            ) from e

        if not isinstance(data, dict):
            raise ParseError(
                ctx.source,
                f"Expected a JSON object, got {type(data).__name__}",
                status_code=resp.status,
            )

        logger.info(
            "Success [%s.%s] elapsed=%.2fs",
            ctx.source,
            ctx.method,
            time.monotonic() - start,
        )
        return data
