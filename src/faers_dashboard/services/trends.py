"""Year-bucketed report counts for the trend chart."""

import logging
from collections import Counter
from collections.abc import Iterable
from typing import Any

from faers_dashboard.data_sources.fda import parse_event
from faers_dashboard.models.model_fda import FAERSEvent
from faers_dashboard.models.model_metrics import TrendPoint

logger = logging.getLogger(__name__)


def bucket_by_year(
    records: Iterable[dict[str, Any] | FAERSEvent] | None,
) -> list[TrendPoint]:
    """Count reports per receive year, ascending, observed years only.

    The year is the first four characters of the receive date (fewer if the
    date is shorter). Reports with no receive date at all are skipped.
    """
    if not records:
        return []

    counts: Counter[str] = Counter()
    skipped = 0
    for record in records:
        year = parse_event(record).year
        if year is None:
            skipped += 1
            continue
        counts[year] += 1

    if skipped:
        logger.debug("Skipped %d reports without a receive date", skipped)

    return [TrendPoint(year=year, count=counts[year]) for year in sorted(counts)]
