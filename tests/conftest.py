"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture
def sample_events() -> list[dict]:
    """Raw openFDA drug event results covering every field the dashboard reads."""
    return [
        {
            "safetyreportid": "10003301",
            "receivedate": "20210304",
            "serious": "1",
            "seriousnessdeath": "1",
            "seriousnesslifethreatening": "1",
            "patient": {
                "patientsex": "1",
                "drug": [{"medicinalproduct": "DURAGESIC-100"}],
                "reaction": [{"reactionmeddrapt": "Respiratory arrest", "reactionoutcome": "5"}],
            },
        },
        {
            "safetyreportid": "10003302",
            "receivedate": "20210101",
            "serious": "1",
            "seriousnesshospitalization": "1",
            "patient": {
                "patientsex": "2",
                "drug": [{"medicinalproduct": "DURAGESIC-100"}],
                "reaction": [{"reactionmeddrapt": "Somnolence"}],
            },
        },
        {
            "safetyreportid": "10003303",
            "receivedate": "20220101",
            "serious": "1",
            "patient": {
                "patientsex": "0",
                "drug": [{"medicinalproduct": "DURAGESIC-100"}],
                "reaction": [{"reactionmeddrapt": "Nausea"}],
            },
        },
        {
            "safetyreportid": "10003304",
            "receivedate": "20190715",
            "serious": "2",
        },
    ]


@pytest.fixture
def sample_payload(sample_events) -> dict:
    """A full openFDA response body wrapping sample_events."""
    return {
        "meta": {
            "disclaimer": "Do not rely on openFDA to make decisions regarding medical care.",
            "results": {"skip": 0, "limit": 100, "total": len(sample_events)},
        },
        "results": sample_events,
    }
