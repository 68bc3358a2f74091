"""Plain-text rendering of the metric tiles and the yearly trend chart."""

from faers_dashboard.constants import (
    NO_DATA_MESSAGE,
    TREND_CHART_TITLE,
    TREND_CHART_WIDTH,
)
from faers_dashboard.models.model_metrics import Metrics, TrendPoint


def metric_tiles(metrics: Metrics) -> list[tuple[str, int]]:
    """Label and value for each dashboard tile, in display order."""
    return [
        ("Total Reports", metrics.total),
        ("Deaths", metrics.deaths),
        ("Hospitalizations", metrics.hospitalizations),
        ("Life-Threatening", metrics.life_threatening),
        ("Serious (Non-DH)", metrics.serious_non_dh),
        ("Male", metrics.by_sex.male),
        ("Female", metrics.by_sex.female),
        ("Unknown Sex", metrics.by_sex.unknown),
    ]


def render_metrics(metrics: Metrics) -> str:
    tiles = metric_tiles(metrics)
    label_width = max(len(label) for label, _ in tiles)
    return "\n".join(f"{label:<{label_width}}  {value:>10,}" for label, value in tiles)


def render_trend(trend: list[TrendPoint], width: int = TREND_CHART_WIDTH) -> str:
    """Horizontal bar chart, one row per year, bars scaled to the largest count."""
    if not trend:
        return NO_DATA_MESSAGE

    peak = max(point.count for point in trend)
    lines = [TREND_CHART_TITLE]
    for point in trend:
        bar = "#" * max(1, round(point.count / peak * width)) if point.count else ""
        lines.append(f"{point.year} | {bar} {point.count:,}")
    return "\n".join(lines)
