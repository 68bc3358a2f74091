"""FastAPI application."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Query, Request
from fastapi.responses import JSONResponse

from faers_dashboard import __version__
from faers_dashboard.constants import ADVERSE_EVENTS_PATH, ERROR_UPSTREAM_FAILED
from faers_dashboard.data_sources.base_client import UpstreamError
from faers_dashboard.data_sources.fda import FDAClient
from faers_dashboard.models.model_metrics import Summary
from faers_dashboard.services.proxy import AdverseEventProxy, ValidationError

_client: FDAClient | None = None


def get_fda_client() -> FDAClient:
    """Shared openFDA client, created on first use."""
    global _client
    if _client is None:
        _client = FDAClient()
    return _client


def get_logger() -> logging.Logger:
    """Logger that receives upstream error detail."""
    return logging.getLogger("faers_dashboard.api.upstream")


def get_proxy(
    client: FDAClient = Depends(get_fda_client),
    log: logging.Logger = Depends(get_logger),
) -> AdverseEventProxy:
    return AdverseEventProxy(client, log)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    yield
    if _client is not None:
        await _client.close()


app = FastAPI(
    title="FAERS Dashboard API",
    description="Proxy and summaries for openFDA drug adverse event reports",
    version=__version__,
    lifespan=lifespan,
)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": ERROR_UPSTREAM_FAILED})


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.get(ADVERSE_EVENTS_PATH)
async def adverse_events(
    drug_name: str | None = Query(default=None, alias="drugName"),
    seriousness: str | None = Query(default=None),
    proxy: AdverseEventProxy = Depends(get_proxy),
) -> dict[str, Any]:
    """Forward a drug search to openFDA and return its body unchanged."""
    return await proxy.fetch(drug_name, seriousness)


@app.get(f"{ADVERSE_EVENTS_PATH}/summary", response_model=Summary)
async def adverse_events_summary(
    drug_name: str | None = Query(default=None, alias="drugName"),
    seriousness: str | None = Query(default=None),
    proxy: AdverseEventProxy = Depends(get_proxy),
) -> Summary:
    """Metrics and yearly trend for a drug search, computed server-side."""
    return await proxy.summarize(drug_name, seriousness)
