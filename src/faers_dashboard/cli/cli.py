"""Command-line interface for FAERS Dashboard."""

import asyncio
import json
import logging
from pathlib import Path

import click

from faers_dashboard.config import get_settings
from faers_dashboard.dashboard import (
    Dashboard,
    DashboardState,
    DirectSource,
    ProxyClient,
)
from faers_dashboard.dashboard.dashboard import EventSource
from faers_dashboard.data_sources.fda import FDAClient
from faers_dashboard.presentation.render import render_metrics, render_trend
from faers_dashboard.services.proxy import AdverseEventProxy
from faers_dashboard.services.query_builder import Seriousness

SERIOUSNESS_CHOICES = [s.value for s in Seriousness]


def _configure_logging() -> None:
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(levelname)s %(name)s %(message)s",
    )


async def _run_search(
    source: EventSource, drug: str, seriousness: str
) -> DashboardState:
    dashboard = Dashboard(source)
    await dashboard.filter_change(seriousness)
    return await dashboard.search(drug)


def _report(state: DashboardState, output: str | None) -> None:
    if state.error:
        raise click.ClickException(state.error)

    click.echo(render_metrics(state.metrics))
    click.echo()
    click.echo(render_trend(state.trend))

    if output:
        payload = {
            "drug": state.current_drug,
            "severity": state.severity.value,
            "metrics": state.metrics.model_dump(by_alias=True),
            "trend": [p.model_dump() for p in state.trend],
        }
        Path(output).write_text(json.dumps(payload, indent=2))
        click.echo(f"\nResults saved to: {output}")


@click.group()
@click.version_option(package_name="faers-dashboard")
def main():
    """FAERS Dashboard: adverse event metrics and trends for a drug."""
    _configure_logging()


@main.command()
@click.option("--host", default=None, help="Bind address (default from settings)")
@click.option("--port", default=None, type=int, help="Port (default from settings)")
def serve(host: str | None, port: int | None):
    """Run the adverse event proxy API."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "faers_dashboard.api.main:app",
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@main.command()
@click.option("-d", "--drug", required=True, help="Drug name to search for")
@click.option(
    "-s",
    "--seriousness",
    type=click.Choice(SERIOUSNESS_CHOICES),
    default=Seriousness.ALL.value,
    show_default=True,
    help="Severity filter",
)
@click.option("--api-url", default=None, help="Dashboard server base URL")
@click.option("-o", "--output", type=click.Path(), help="Output file path (JSON)")
def search(drug: str, seriousness: str, api_url: str | None, output: str | None):
    """Search a running dashboard server and print metrics and trend."""

    async def run() -> DashboardState:
        async with ProxyClient(api_url or get_settings().api_base_url) as client:
            return await _run_search(client, drug, seriousness)

    _report(asyncio.run(run()), output)


@main.command()
@click.option("-d", "--drug", required=True, help="Drug name to search for")
@click.option(
    "-s",
    "--seriousness",
    type=click.Choice(SERIOUSNESS_CHOICES),
    default=Seriousness.ALL.value,
    show_default=True,
    help="Severity filter",
)
@click.option("-o", "--output", type=click.Path(), help="Output file path (JSON)")
def query(drug: str, seriousness: str, output: str | None):
    """Query openFDA directly and print metrics and trend."""

    async def run() -> DashboardState:
        async with FDAClient() as client:
            return await _run_search(
                DirectSource(AdverseEventProxy(client)), drug, seriousness
            )

    _report(asyncio.run(run()), output)


if __name__ == "__main__":
    main()
