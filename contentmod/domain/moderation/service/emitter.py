"""ModerationEventEmitter - best-effort notifications after an action is applied."""

import logging
from typing import Any

from contentmod.domain.moderation.model.value import ActionOutcome, ModerationResult
from contentmod.domain.moderation.port.event_publisher import EventPublisher
from contentmod.domain.shared.service import Service

logger = logging.getLogger(__name__)

EVENT_TYPE_PREFIX = "content-moderation.v1"
MODERATED_EVENT = f"{EVENT_TYPE_PREFIX}.moderated"
FLAGGED_EVENT = f"{EVENT_TYPE_PREFIX}.flagged"


class ModerationEventEmitter(Service):
    """Publishes `moderated` (always) and `flagged` (flagged only) events.

    `publisher` is None when events are disabled. Publish failures are logged
    and dropped: the action has already been committed and its outcome is
    what the caller gets back.
    """

    publisher: EventPublisher | None

    async def emit(self, path: str, result: ModerationResult, outcome: ActionOutcome) -> None:
        if self.publisher is None:
            return

        payload = result.to_payload()
        await self._publish(
            MODERATED_EVENT, path, {"documentPath": path, **payload, "action": outcome.action.value}
        )
        if result.flagged:
            await self._publish(FLAGGED_EVENT, path, {"documentPath": path, **payload})

    async def _publish(self, event_type: str, path: str, data: dict[str, Any]) -> None:
        assert self.publisher is not None
        try:
            await self.publisher.publish(event_type, subject=path, data=data)
        except Exception:
            logger.exception(f"Failed to publish {event_type} for {path}")
