"""Worker for sequential, pull-based event processing."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from dishka import AsyncContainer

from contentmod.domain.shared.event import Event, EventHandler
from contentmod.domain.shared.port.event_repository import EventRepository
from contentmod.util.di.scope import Scope

logger = logging.getLogger(__name__)


class WorkerStatus(Enum):
    """Status of a running worker."""

    IDLE = "idle"
    PROCESSING = "processing"


@dataclass
class WorkerState:
    """Runtime state for a running worker (not persisted).

    Attributes:
        status: Current worker status.
        current_event: Event currently being processed.
        processed_count: Total deliveries handled successfully.
        failed_count: Total deliveries whose handler raised.
        error: Last error if any.
    """

    status: WorkerStatus = WorkerStatus.IDLE
    current_event: Event | None = None
    processed_count: int = 0
    failed_count: int = 0
    error: Exception | None = None


class Worker:
    """Drains the event queue one delivery at a time.

    Each delivery is handled by the handler named as its consumer group,
    resolved inside a fresh UOW scope so it gets its own database session.
    Deliveries are strictly sequential, so a backfill chain never has more
    than one batch running.

    A handler that raises is the invocation's fault: the error is logged and
    counted, and the UOW still commits whatever the handler recorded before
    raising (e.g. `status=error` metadata).

    Example:
        worker = Worker(container, repo, [ModerateOnCreate, RunBackfill])
        await worker.run_until_idle()
    """

    def __init__(
        self,
        container: AsyncContainer,
        repo: EventRepository,
        handler_types: list[type[EventHandler[Any]]],
    ) -> None:
        self._container = container
        self._repo = repo
        self._handlers = {h.__name__: h for h in handler_types}
        self._state = WorkerState()

    @property
    def state(self) -> WorkerState:
        """Current worker state."""
        return self._state

    async def run_once(self) -> bool:
        """Process the oldest pending delivery.

        Returns:
            True if a delivery was processed, False if the queue was empty.
        """
        claimed = await self._repo.claim_next()
        if claimed is None:
            return False

        event, consumer_group = claimed
        handler_type = self._handlers.get(consumer_group)
        if handler_type is None:
            logger.warning(f"No handler registered for {consumer_group}, dropping {event.id}")
            return True

        self._state.status = WorkerStatus.PROCESSING
        self._state.current_event = event

        async with self._container(scope=Scope.UOW) as scope:
            try:
                handler = await scope.get(handler_type)
                await handler.handle(event)
                self._state.processed_count += 1
            except Exception as e:
                self._state.failed_count += 1
                self._state.error = e
                logger.error(f"Handler '{consumer_group}' failed on {type(event).__name__}: {e}")
            finally:
                self._state.current_event = None
                self._state.status = WorkerStatus.IDLE

        return True

    async def run_until_idle(self, max_deliveries: int | None = None) -> int:
        """Process deliveries until the queue is empty.

        Args:
            max_deliveries: Optional safety cap on deliveries processed.

        Returns:
            Number of deliveries processed.
        """
        count = 0
        while max_deliveries is None or count < max_deliveries:
            if not await self.run_once():
                break
            count += 1
        return count
