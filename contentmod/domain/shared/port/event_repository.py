"""EventRepository port - storage for queued events."""

from typing import Protocol

from contentmod.domain.shared.event import Event


class EventRepository(Protocol):
    """Repository for queued domain events.

    Events are appended with the consumer groups that should receive them and
    claimed one at a time, oldest first.
    """

    async def save_with_deliveries(self, event: Event, consumer_groups: set[str]) -> None:
        """Queue an event for each consumer group.

        Args:
            event: The event to persist.
            consumer_groups: Handler names to deliver to. If empty, the event
                is kept for audit only and never delivered.
        """
        ...

    async def claim_next(self) -> tuple[Event, str] | None:
        """Pop the oldest pending delivery.

        Returns:
            The event and the consumer group it is addressed to, or None
            when nothing is pending.
        """
        ...

    async def find_latest_by_type(self, event_type: type[Event]) -> Event | None:
        """Find the most recent event of a given type."""
        ...

    async def pending_count(self) -> int:
        """Number of deliveries not yet claimed."""
        ...
