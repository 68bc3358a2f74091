"""Aggregate metrics and trend series derived from a list of FAERS events."""

from pydantic import BaseModel, ConfigDict, Field


class SexBreakdown(BaseModel):
    """Report counts by reported patient sex."""

    male: int = 0
    female: int = 0
    unknown: int = 0

    @property
    def total(self) -> int:
        return self.male + self.female + self.unknown


class Metrics(BaseModel):
    """Summary counters for one event list.

    The flag-based counters are independent tallies over the same list: one
    report can count toward both ``deaths`` and ``life_threatening``.
    ``serious_non_dh`` counts serious reports that are neither deaths nor
    hospitalizations. Serialized with the camelCase names the dashboard
    tiles use.
    """

    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    deaths: int = 0
    hospitalizations: int = 0
    life_threatening: int = Field(default=0, alias="lifeThreatening")
    serious_non_dh: int = Field(default=0, alias="seriousNonDH")
    by_sex: SexBreakdown = Field(default_factory=SexBreakdown, alias="bySex")


class TrendPoint(BaseModel):
    """Number of reports received in one year."""

    year: str
    count: int


class Summary(BaseModel):
    """Metrics and trend series computed for one query."""

    metrics: Metrics
    trend: list[TrendPoint] = []
