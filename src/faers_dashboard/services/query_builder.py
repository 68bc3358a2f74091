"""
Build openFDA drug event search expressions.

The drug name is embedded verbatim inside a quoted exact-match token; URL
encoding happens later, when the params are sent. No other escaping is done.
"""

from enum import Enum
from urllib.parse import urlencode

from faers_dashboard.constants import (
    CLAUSE_JOINER,
    DEATH_CLAUSE,
    DRUG_CLAUSE_TEMPLATE,
    ERROR_INVALID_SERIOUSNESS,
    HOSPITALIZATION_CLAUSE,
    OPENFDA_BASE_URL,
    OPENFDA_PAGE_SIZE,
)


class Seriousness(str, Enum):
    """Severity filter offered by the dashboard dropdown."""

    ALL = "All"
    DEATH = "Death"
    HOSPITALIZATION = "Hospitalization"


_SERIOUSNESS_CLAUSES: dict[Seriousness, str] = {
    Seriousness.DEATH: DEATH_CLAUSE,
    Seriousness.HOSPITALIZATION: HOSPITALIZATION_CLAUSE,
}


def parse_seriousness(value: str | Seriousness | None) -> Seriousness:
    """Map a raw filter value to Seriousness; absent or empty means ALL.

    Raises ValueError for anything else.
    """
    if value is None or value == "":
        return Seriousness.ALL
    try:
        return Seriousness(value)
    except ValueError:
        raise ValueError(f"{ERROR_INVALID_SERIOUSNESS}: {value!r}") from None


def build_search_expression(
    drug_name: str, seriousness: Seriousness | None = None
) -> str:
    """Return the openFDA ``search`` expression for a drug and severity filter."""
    clauses = [DRUG_CLAUSE_TEMPLATE.format(drug_name=drug_name)]
    extra = _SERIOUSNESS_CLAUSES.get(seriousness or Seriousness.ALL)
    if extra:
        clauses.append(extra)
    return CLAUSE_JOINER.join(clauses)


def build_params(
    drug_name: str,
    seriousness: Seriousness | None = None,
    api_key: str = "",
) -> dict[str, str]:
    """Build the query parameters for one page of drug event results."""
    params: dict[str, str] = {
        "search": build_search_expression(drug_name, seriousness),
        "limit": str(OPENFDA_PAGE_SIZE),
    }
    if api_key:
        params["api_key"] = api_key
    return params


def build_url(
    drug_name: str,
    seriousness: Seriousness | None = None,
    base_url: str = OPENFDA_BASE_URL,
) -> str:
    """Return the fully encoded request URL, without any API key."""
    return f"{base_url}?{urlencode(build_params(drug_name, seriousness))}"
