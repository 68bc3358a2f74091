"""openFDA FAERS (Drug Adverse Event) data models."""

from enum import Enum

from pydantic import BaseModel


class Sex(str, Enum):
    """Reported patient sex, decoded from openFDA ``patient.patientsex``."""

    MALE = "male"
    FEMALE = "female"
    UNKNOWN = "unknown"


class FAERSEvent(BaseModel):
    """Single adverse event report with provider flags decoded to booleans.

    Every field is optional in the source feed; an absent flag is False and
    an absent sex is UNKNOWN.
    """

    safety_report_id: str | None = None
    receive_date: str | None = None
    death: bool = False
    hospitalization: bool = False
    life_threatening: bool = False
    serious: bool = False
    sex: Sex = Sex.UNKNOWN
    drugs: list[str] = []
    drug_indications: list[str] = []
    reactions: list[str] = []
    reaction_outcome: str | None = None

    @property
    def year(self) -> str | None:
        """Up to the first four characters of the receive date."""
        if self.receive_date:
            return self.receive_date[:4]
        return None
