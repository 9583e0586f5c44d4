"""In-memory application state with change notification."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from models.records import DashboardState
from services.errors import StateStoreBusyError

logger = logging.getLogger(__name__)

StateListener = Callable[[DashboardState], None]


class StateStore:
    """Holds the current :class:`DashboardState` and notifies subscribers.

    The triple is swapped in a single assignment, so readers either see the
    previous state or the new one, never a mix. Listeners run synchronously
    inside :meth:`replace`; a replacement requested while they are running is
    rejected.
    """

    def __init__(self, initial: Optional[DashboardState] = None) -> None:
        self._state = initial if initial is not None else DashboardState.empty()
        self._listeners: List[StateListener] = []
        self._notifying = False
        self.revision = 0
        self.updated_at: Optional[datetime] = None

    @property
    def snapshot(self) -> DashboardState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def replace(self, state: DashboardState) -> None:
        if self._notifying:
            raise StateStoreBusyError("State replaced while listeners were being notified.")

        self._state = state
        self.revision += 1
        self.updated_at = datetime.now(timezone.utc)
        logger.debug(
            "State replaced",
            extra={"revision": self.revision, **state.counts()},
        )

        self._notifying = True
        try:
            for listener in list(self._listeners):
                listener(state)
        finally:
            self._notifying = False
