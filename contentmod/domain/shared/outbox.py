"""Outbox - domain service for queued event delivery."""

import logging
from typing import TypeVar

from contentmod.domain.shared.event import Event
from contentmod.domain.shared.model.subscription_registry import SubscriptionRegistry
from contentmod.domain.shared.port.event_repository import EventRepository
from contentmod.domain.shared.service import Service

E = TypeVar("E", bound=Event)

logger = logging.getLogger(__name__)


class Outbox(Service):
    """Domain service for event delivery via the outbox pattern.

    On append(), looks up the handlers subscribed to the event type and queues
    one delivery per handler. Events without subscribers (e.g.
    BackfillCompleted) are kept as audit entries only.
    """

    _repo: EventRepository
    _registry: SubscriptionRegistry

    async def append(self, event: Event) -> None:
        """Add an event to the outbox for delivery."""
        event_type_name = type(event).__name__
        consumer_groups = self._registry.get(event_type_name, set())
        logger.debug(
            "Outbox append: %s -> %s", event_type_name, sorted(consumer_groups) or "audit-only"
        )
        await self._repo.save_with_deliveries(event, consumer_groups=consumer_groups)

    async def find_latest(self, event_type: type[E]) -> E | None:
        """Find the most recent event of a given type."""
        return await self._repo.find_latest_by_type(event_type)  # type: ignore[return-value]
