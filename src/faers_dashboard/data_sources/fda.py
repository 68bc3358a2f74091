"""
openFDA FAERS (Drug Adverse Event) client.

Two methods:
  1. get_event_payload: raw JSON body for one page of matching reports
  2. get_events:        the same reports, decoded into FAERSEvent models
"""

from __future__ import annotations

import logging
from typing import Any

from faers_dashboard.config import get_settings
from faers_dashboard.constants import (
    OPENFDA_FLAG_TRUE,
    OPENFDA_SOURCE_NAME,
    REACTION_OUTCOME_MAP,
    SEX_CODE_FEMALE,
    SEX_CODE_MALE,
)
from faers_dashboard.data_sources.base_client import (
    BaseClient,
    ClientConfig,
    RequestContext,
)
from faers_dashboard.models.model_fda import FAERSEvent, Sex
from faers_dashboard.services.query_builder import Seriousness, build_params

logger = logging.getLogger("faers_dashboard.data_sources.fda")


def parse_flag(value: Any) -> bool:
    """Decode an openFDA boolean: only the literal string "1" is true."""
    return value == OPENFDA_FLAG_TRUE


def parse_sex(value: Any) -> Sex:
    """Decode ``patient.patientsex``; anything but "1" or "2" is UNKNOWN."""
    if value == SEX_CODE_MALE:
        return Sex.MALE
    if value == SEX_CODE_FEMALE:
        return Sex.FEMALE
    return Sex.UNKNOWN


def _text(value: Any) -> str | None:
    """Scalar as a string; None for absent, empty or nested values."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (str, int, float)):
        return str(value) or None
    return None


def _records(value: Any) -> list[dict[str, Any]]:
    """The dict entries of a sub-record list; anything else is dropped."""
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, dict)]


def event_results(data: dict[str, Any]) -> list[Any]:
    """The ``results`` list of a response body; empty if absent or not a list."""
    results = data.get("results")
    return results if isinstance(results, list) else []


def parse_event(raw: dict[str, Any] | FAERSEvent) -> FAERSEvent:
    """Parse a single event result into FAERSEvent.

    Already-parsed events are returned as is, so callers can hand either raw
    provider records or FAERSEvent instances to the aggregation functions.
    Never raises: a field of an unexpected type is read as absent, except
    numeric scalars, which are kept as strings.
    """
    if isinstance(raw, FAERSEvent):
        return raw
    if not isinstance(raw, dict):
        return FAERSEvent()

    patient = raw.get("patient")
    if not isinstance(patient, dict):
        patient = {}
    drugs = _records(patient.get("drug"))
    reactions = _records(patient.get("reaction"))

    first_reaction = reactions[0] if reactions else {}
    outcome_code = first_reaction.get("reactionoutcome")
    reaction_outcome = REACTION_OUTCOME_MAP.get(_text(outcome_code) or "")

    return FAERSEvent(
        safety_report_id=_text(raw.get("safetyreportid")),
        receive_date=_text(raw.get("receivedate")),
        death=parse_flag(raw.get("seriousnessdeath")),
        hospitalization=parse_flag(raw.get("seriousnesshospitalization")),
        life_threatening=parse_flag(raw.get("seriousnesslifethreatening")),
        serious=parse_flag(raw.get("serious")),
        sex=parse_sex(patient.get("patientsex")),
        drugs=[n for n in (_text(d.get("medicinalproduct")) for d in drugs) if n],
        drug_indications=[
            n for n in (_text(d.get("drugindication")) for d in drugs) if n
        ],
        reactions=[
            n for n in (_text(r.get("reactionmeddrapt")) for r in reactions) if n
        ],
        reaction_outcome=reaction_outcome,
    )


class FDAClient(BaseClient):
    """Client for querying the openFDA Drug Adverse Event API."""

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        settings = get_settings()
        super().__init__(
            config or ClientConfig(timeout_seconds=settings.request_timeout_seconds)
        )
        self._api_key = api_key if api_key is not None else settings.openfda_api_key
        self._base_url = base_url or settings.openfda_base_url

    @property
    def _source_name(self) -> str:
        return OPENFDA_SOURCE_NAME

    # -- Public methods -------------------------------------------------------

    async def get_event_payload(
        self, drug_name: str, seriousness: Seriousness | None = None
    ) -> dict[str, Any]:
        """Return the provider's JSON body for one page of matching reports.

        Raises UpstreamError (or its ParseError subclass) on any failure.
        """
        params = build_params(drug_name, seriousness, self._api_key)
        context = RequestContext(
            source=self._source_name,
            method="get_event_payload",
            params={"drug_name": drug_name, "seriousness": seriousness},
        )
        return await self._rest_get(self._base_url, params, context=context)

    async def get_events(
        self, drug_name: str, seriousness: Seriousness | None = None
    ) -> list[FAERSEvent]:
        """Return matching adverse event records for a drug."""
        data = await self.get_event_payload(drug_name, seriousness)
        results = event_results(data)
        logger.debug("Parsing %d events for %r", len(results), drug_name)

        return [parse_event(r) for r in results]
