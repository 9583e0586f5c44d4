"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Tuple

# A reading arrives as {"timestamp": str, "temperatura": number}. Entries are
# kept exactly as received; nothing below the field level is validated before
# the view layer touches them.
Reading = Mapping[str, Any]
ReadingSeries = Tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class DashboardState:
    """The history series plus the two extremal sets, replaced as one unit."""

    history: ReadingSeries = ()
    highest: ReadingSeries = ()
    lowest: ReadingSeries = ()

    @classmethod
    def empty(cls) -> "DashboardState":
        return cls()

    def counts(self) -> dict[str, int]:
        return {
            "history_count": len(self.history),
            "highest_count": len(self.highest),
            "lowest_count": len(self.lowest),
        }
