"""Summary counters over a list of adverse event reports."""

from collections.abc import Iterable
from typing import Any

from faers_dashboard.data_sources.fda import parse_event
from faers_dashboard.models.model_fda import FAERSEvent, Sex
from faers_dashboard.models.model_metrics import Metrics, SexBreakdown


def compute_metrics(
    records: Iterable[dict[str, Any] | FAERSEvent] | None,
) -> Metrics:
    """Count totals, seriousness flags and sex breakdown for a list of reports.

    ``records`` may be raw openFDA results or parsed FAERSEvents. None or an
    empty list gives all-zero Metrics.
    """
    metrics = Metrics()
    if not records:
        return metrics

    by_sex = SexBreakdown()
    for record in records:
        event = parse_event(record)
        metrics.total += 1
        if event.death:
            metrics.deaths += 1
        if event.hospitalization:
            metrics.hospitalizations += 1
        if event.life_threatening:
            metrics.life_threatening += 1
        if event.serious and not event.death and not event.hospitalization:
            metrics.serious_non_dh += 1

        if event.sex is Sex.MALE:
            by_sex.male += 1
        elif event.sex is Sex.FEMALE:
            by_sex.female += 1
        else:
            by_sex.unknown += 1

    metrics.by_sex = by_sex
    return metrics
