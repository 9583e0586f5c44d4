"""Periodic fetch -> normalize -> commit loop."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional, Set

from services.errors import ReadingFormatError, TelemetryFetchError
from services.normalizer import normalize_payload
from services.state_store import StateStore
from services.telemetry_client import TelemetryClient

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 5.0


class RefreshScheduler:
    """Drives refresh cycles on a fixed period while active.

    Each tick starts its cycle as an independent task and does not wait for
    it, so a slow request can overlap the next one; whichever cycle finishes
    last owns the state. Cycles that finish after :meth:`stop` (or after a
    later :meth:`start`) are discarded.
    """

    def __init__(
        self,
        client: TelemetryClient,
        store: StateStore,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError("Refresh interval must be positive.")
        self.client = client
        self.store = store
        self.interval = interval
        self._ticker: Optional[asyncio.Task[None]] = None
        self._in_flight: Set[asyncio.Task[bool]] = set()
        self._generation = 0
        self._active = False

    @property
    def is_active(self) -> bool:
        return self._active

    def start(self) -> None:
        """Run one cycle now and then every ``interval`` seconds.

        Must be called from within a running event loop. A second call while
        active does nothing.
        """
        if self._active:
            return
        self._active = True
        self._generation += 1
        self._ticker = asyncio.get_running_loop().create_task(
            self._tick_forever(self._generation)
        )
        logger.info(
            "Polling started",
            extra={"url": self.client.url, "generation": self._generation},
        )

    def stop(self) -> None:
        if not self._active:
            return
        self._active = False
        if self._ticker is not None:
            self._ticker.cancel()
            self._ticker = None
        logger.info("Polling stopped", extra={"generation": self._generation})

    async def drain(self) -> None:
        """Wait for cycles that were already in flight to finish."""
        if self._in_flight:
            await asyncio.gather(*self._in_flight, return_exceptions=True)

    async def refresh_once(self) -> bool:
        """Run a single cycle, returning ``True`` when the state was replaced."""
        return await self._run_cycle(generation=None)

    async def _tick_forever(self, generation: int) -> None:
        loop = asyncio.get_running_loop()
        while True:
            task = loop.create_task(self._run_cycle(generation))
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            await asyncio.sleep(self.interval)

    def _is_current(self, generation: Optional[int]) -> bool:
        if generation is None:
            return True
        return self._active and generation == self._generation

    async def _run_cycle(self, generation: Optional[int]) -> bool:
        started = time.perf_counter()
        try:
            payload = await self.client.fetch()
        except TelemetryFetchError as exc:
            logger.warning(
                "Telemetry refresh failed; keeping last known state",
                extra={
                    "url": exc.url,
                    "status_code": getattr(exc, "status_code", None),
                    "reason": str(exc),
                },
            )
            return False

        state = normalize_payload(payload)

        if not self._is_current(generation):
            logger.debug(
                "Discarding refresh that completed after polling stopped",
                extra={"generation": generation},
            )
            return False

        try:
            self.store.replace(state)
        except ReadingFormatError:
            # The state is committed; only a dependent view failed to render.
            logger.exception(
                "Dashboard view could not be rendered from refreshed state",
                extra={"revision": self.store.revision},
            )
        logger.debug(
            "Telemetry refresh applied",
            extra={
                "revision": self.store.revision,
                "elapsed_ms": int((time.perf_counter() - started) * 1000),
                **state.counts(),
            },
        )
        return True
