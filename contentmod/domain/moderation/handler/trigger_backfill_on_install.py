"""TriggerBackfillOnInstall - starts the backfill scan when the extension is installed."""

import logging
from uuid import uuid4

from contentmod.application.event import ExtensionInstalled
from contentmod.domain.moderation.event.backfill_requested import BackfillRequested
from contentmod.domain.shared.event import EventHandler, EventId
from contentmod.domain.shared.outbox import Outbox

logger = logging.getLogger(__name__)


class TriggerBackfillOnInstall(EventHandler[ExtensionInstalled]):
    """Emits the first BackfillRequested on install.

    The request is emitted even when backfill is disabled: the first batch
    reports the skip as the scan's terminal state.
    """

    outbox: Outbox

    async def handle(self, event: ExtensionInstalled) -> None:
        logger.info("Extension installed, requesting backfill")
        await self.outbox.append(BackfillRequested(id=EventId(uuid4()), start_after=None))
