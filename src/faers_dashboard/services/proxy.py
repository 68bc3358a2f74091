"""
Adverse event proxy.

Validates the caller's input, forwards the query to openFDA and passes the
provider's body through unchanged. Upstream failures are logged with full
detail and re-raised with a fixed generic message so nothing the provider
said reaches the caller.
"""

import logging
from typing import Any

from faers_dashboard.constants import (
    ERROR_DRUG_NAME_REQUIRED,
    ERROR_INVALID_SERIOUSNESS,
    ERROR_UPSTREAM_FAILED,
    OPENFDA_SOURCE_NAME,
)
from faers_dashboard.data_sources.base_client import UpstreamError
from faers_dashboard.data_sources.fda import FDAClient, event_results
from faers_dashboard.models.model_metrics import Summary
from faers_dashboard.services.aggregator import compute_metrics
from faers_dashboard.services.query_builder import Seriousness, parse_seriousness
from faers_dashboard.services.trends import bucket_by_year

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    """Raised when the caller's query is missing or malformed."""

    pass


class AdverseEventProxy:
    """Stateless request handler in front of the openFDA client."""

    def __init__(self, client: FDAClient, log: logging.Logger | None = None) -> None:
        self._client = client
        self._log = log or logger

    @staticmethod
    def validate(
        drug_name: str | None, seriousness: str | None = None
    ) -> tuple[str, Seriousness]:
        """Return the trimmed drug name and parsed filter, or raise ValidationError."""
        if drug_name is None or not drug_name.strip():
            raise ValidationError(ERROR_DRUG_NAME_REQUIRED)
        try:
            parsed = parse_seriousness(seriousness)
        except ValueError:
            raise ValidationError(ERROR_INVALID_SERIOUSNESS) from None
        # The drug name is forwarded as typed; only the blank check trims.
        return drug_name, parsed

    async def fetch(
        self, drug_name: str | None, seriousness: str | None = None
    ) -> dict[str, Any]:
        """Return the provider's JSON body for the query, unchanged."""
        name, severity = self.validate(drug_name, seriousness)
        try:
            return await self._client.get_event_payload(name, severity)
        except UpstreamError as e:
            self._log.error(
                "Error fetching from OpenFDA (drug=%r, seriousness=%s, status=%s): %s",
                name,
                severity.value,
                e.status_code,
                e,
            )
            raise UpstreamError(OPENFDA_SOURCE_NAME, ERROR_UPSTREAM_FAILED) from e

    async def summarize(
        self, drug_name: str | None, seriousness: str | None = None
    ) -> Summary:
        """Fetch the query and reduce its results to metrics and a trend series."""
        data = await self.fetch(drug_name, seriousness)
        results = event_results(data)
        return Summary(metrics=compute_metrics(results), trend=bucket_by_year(results))
