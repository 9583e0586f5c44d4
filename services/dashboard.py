"""Wiring of client, store, scheduler and cached view for one dashboard."""

from __future__ import annotations

from datetime import tzinfo
from functools import lru_cache
from typing import Optional

from models.records import DashboardState
from services.projections import DashboardView, project_dashboard
from services.scheduler import RefreshScheduler
from services.state_store import StateStore
from services.telemetry_client import TelemetryClient
from settings import get_settings


class DashboardService:
    """Owns the polling pipeline and the latest rendered view."""

    def __init__(
        self,
        client: TelemetryClient,
        store: Optional[StateStore] = None,
        interval: float = 5.0,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self.client = client
        self.store = store or StateStore()
        self.scheduler = RefreshScheduler(client, self.store, interval=interval)
        self.tz = tz
        self._view = project_dashboard(self.store.snapshot, tz)
        self.view_revision = self.store.revision
        self.view_updated_at = self.store.updated_at
        self._unsubscribe = self.store.subscribe(self._recompute_view)

    @property
    def view(self) -> DashboardView:
        """Last view that rendered successfully."""
        return self._view

    @property
    def state(self) -> DashboardState:
        return self.store.snapshot

    def start(self) -> None:
        self.scheduler.start()

    async def shutdown(self) -> None:
        """Stop polling, let in-flight requests settle and release the client."""
        self.scheduler.stop()
        await self.scheduler.drain()
        self._unsubscribe()
        await self.client.aclose()

    def _recompute_view(self, state: DashboardState) -> None:
        self._view = project_dashboard(state, self.tz)
        # Only advanced once the view rendered, so the pair always matches.
        self.view_revision = self.store.revision
        self.view_updated_at = self.store.updated_at


@lru_cache
def build_default_dashboard() -> DashboardService:
    """Factory that wires the dashboard from environment settings."""
    settings = get_settings()
    client = TelemetryClient(settings.telemetry_url, timeout=settings.request_timeout)
    return DashboardService(
        client=client,
        interval=settings.refresh_interval,
        tz=settings.tzinfo,
    )
