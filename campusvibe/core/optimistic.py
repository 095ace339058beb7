"""Optimistic counter shown next to check-in and RSVP buttons.

The displayed count moves as soon as the user acts and is reconciled with
the server once the write settles. The state machine keeps the displayed
value derivable from ``confirmed`` and the single in-flight ``delta``::

    IDLE ──begin──> PENDING ──commit────> COMMITTED
                       │
                       └────rollback──> ROLLED_BACK

``begin`` is accepted from every state except PENDING, so a second tap
while a write is in flight cannot stack another delta on top.
"""
import enum
from typing import Optional


class CounterState(str, enum.Enum):
    IDLE = "idle"
    PENDING = "pending"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class InvalidTransition(RuntimeError):
    pass


class OptimisticCounter:
    """Count with at most one unconfirmed change."""

    def __init__(self, confirmed: int = 0):
        self.confirmed = confirmed
        self.state = CounterState.IDLE
        self._delta = 0

    @property
    def pending(self) -> bool:
        return self.state is CounterState.PENDING

    @property
    def displayed(self) -> int:
        """The value to render right now."""
        return self.confirmed + (self._delta if self.pending else 0)

    def begin(self, delta: int = 1) -> int:
        """Start an optimistic change and return the new displayed value."""
        if self.pending:
            raise InvalidTransition("A change is already pending")
        self._delta = delta
        self.state = CounterState.PENDING
        return self.displayed

    def commit(self, server_count: Optional[int] = None) -> int:
        """Confirm the pending change.

        When the server reports its own count, that value wins over the
        local arithmetic.
        """
        if not self.pending:
            raise InvalidTransition(f"Cannot commit from {self.state.value}")
        if server_count is None:
            self.confirmed += self._delta
        else:
            self.confirmed = server_count
        self._delta = 0
        self.state = CounterState.COMMITTED
        return self.displayed

    def rollback(self) -> int:
        """Drop the pending change and return to the last confirmed value."""
        if not self.pending:
            raise InvalidTransition(f"Cannot roll back from {self.state.value}")
        self._delta = 0
        self.state = CounterState.ROLLED_BACK
        return self.displayed

    def sync(self, server_count: int) -> int:
        """Adopt the server's count; ignored while a change is in flight."""
        if not self.pending:
            self.confirmed = server_count
        return self.displayed
