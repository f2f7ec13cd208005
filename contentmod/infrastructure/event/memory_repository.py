"""In-memory EventRepository - FIFO delivery queue plus an append-only log."""

from collections import deque

from contentmod.domain.shared.event import Event
from contentmod.domain.shared.port.event_repository import EventRepository


class InMemoryEventRepository(EventRepository):
    """Process-local queue; deliveries are lost on exit."""

    def __init__(self) -> None:
        self._log: list[Event] = []
        self._pending: deque[tuple[Event, str]] = deque()

    async def save_with_deliveries(self, event: Event, consumer_groups: set[str]) -> None:
        self._log.append(event)
        for group in sorted(consumer_groups):
            self._pending.append((event, group))

    async def claim_next(self) -> tuple[Event, str] | None:
        if not self._pending:
            return None
        return self._pending.popleft()

    async def find_latest_by_type(self, event_type: type[Event]) -> Event | None:
        for event in reversed(self._log):
            if isinstance(event, event_type):
                return event
        return None

    async def pending_count(self) -> int:
        return len(self._pending)

    @property
    def events(self) -> list[Event]:
        """Every event appended so far, oldest first."""
        return list(self._log)
