"""Project-wide constants."""

# -- Base client defaults ---------------------------------------------------
DEFAULT_TIMEOUT: float = 30.0

# -- openFDA ----------------------------------------------------------------
OPENFDA_BASE_URL: str = "https://api.fda.gov/drug/event.json"
OPENFDA_PAGE_SIZE: int = 100
OPENFDA_SOURCE_NAME: str = "openfda"

# The provider encodes every boolean flag as the literal string "1".
OPENFDA_FLAG_TRUE: str = "1"

# -- Search clauses ---------------------------------------------------------
DRUG_CLAUSE_TEMPLATE: str = 'patient.drug.medicinalproduct:"{drug_name}"'
DEATH_CLAUSE: str = "seriousnessdeath:1"
HOSPITALIZATION_CLAUSE: str = "seriousnesshospitalization:1"
CLAUSE_JOINER: str = "+"

# -- Proxy endpoint ---------------------------------------------------------
ADVERSE_EVENTS_PATH: str = "/api/adverse-events"
ERROR_DRUG_NAME_REQUIRED: str = "Drug name is required"
ERROR_INVALID_SERIOUSNESS: str = "Invalid seriousness filter"
ERROR_UPSTREAM_FAILED: str = "Failed to fetch data from OpenFDA"
ERROR_FETCH_FAILED: str = "Failed to fetch data"

# -- Patient sex codes (openFDA patient.patientsex) -------------------------
SEX_CODE_MALE: str = "1"
SEX_CODE_FEMALE: str = "2"

# -- Reaction outcome codes → label (openFDA patient.reaction.reactionoutcome)
REACTION_OUTCOME_MAP: dict[str, str] = {
    "1": "Recovered/Resolved",
    "2": "Recovering/Resolving",
    "3": "Not Recovered/Not Resolved",
    "4": "Recovered/Resolved with Sequelae",
    "5": "Fatal",
    "6": "Unknown",
}

# -- Presentation -----------------------------------------------------------
TREND_CHART_TITLE: str = "Adverse Events Over Time"
TREND_CHART_WIDTH: int = 40
NO_DATA_MESSAGE: str = "No data to display"
