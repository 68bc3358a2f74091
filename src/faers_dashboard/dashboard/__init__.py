"""Client-side dashboard pipeline."""

from faers_dashboard.dashboard.dashboard import Dashboard, DashboardState
from faers_dashboard.dashboard.sources import (
    DashboardFetchError,
    DirectSource,
    ProxyClient,
)

__all__ = [
    "Dashboard",
    "DashboardState",
    "DashboardFetchError",
    "DirectSource",
    "ProxyClient",
]
