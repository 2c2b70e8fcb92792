"""Pool events.

Every successful create/supply/remove/swap appends one event to the
EventLog. Events carry the pool's two asset types in canonical order, the
numeric payload of the operation and a timestamp in seconds.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Annotated, Literal

import structlog
from pydantic import BaseModel, Field

logger = structlog.get_logger()


class PoolEvent(BaseModel):
    """Fields shared by all pool events."""

    coin_a: str = Field(description="Canonical first asset type")
    coin_b: str = Field(description="Canonical second asset type")
    timestamp: int = Field(ge=0, description="Seconds since the epoch")

    model_config = {"frozen": True}


class PoolCreated(PoolEvent):
    kind: Literal["pool_created"] = "pool_created"
    share_token: str


class LiquiditySupplied(PoolEvent):
    kind: Literal["liquidity_supplied"] = "liquidity_supplied"
    amount_a: int
    amount_b: int
    shares_minted: int


class LiquidityRemoved(PoolEvent):
    kind: Literal["liquidity_removed"] = "liquidity_removed"
    shares_burned: int
    amount_a: int
    amount_b: int


class Swapped(PoolEvent):
    kind: Literal["swapped"] = "swapped"
    amount_a_in: int
    amount_a_out: int
    amount_b_in: int
    amount_b_out: int


AnyEvent = Annotated[
    PoolCreated | LiquiditySupplied | LiquidityRemoved | Swapped,
    Field(discriminator="kind"),
]


def _wall_clock() -> int:
    return int(time.time())


class EventLog:
    """Append-only, thread-safe event log.

    Args:
        clock: Returns the current time in seconds. Defaults to wall clock;
            tests inject a fixed clock.
    """

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock or _wall_clock
        self._events: list[PoolEvent] = []
        self._lock = threading.Lock()

    def now(self) -> int:
        return self._clock()

    def emit(self, event: PoolEvent) -> None:
        with self._lock:
            self._events.append(event)
        logger.info(event.kind, **event.model_dump(exclude={"kind", "timestamp"}))  # type: ignore[attr-defined]

    def events(self, kind: str | None = None) -> list[PoolEvent]:
        """Events in emission order, optionally filtered by kind."""
        with self._lock:
            if kind is None:
                return list(self._events)
            return [e for e in self._events if getattr(e, "kind", None) == kind]

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)
