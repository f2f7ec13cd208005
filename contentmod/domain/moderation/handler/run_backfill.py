"""RunBackfill - handles BackfillRequested events."""

from contentmod.domain.moderation.event.backfill_requested import BackfillRequested
from contentmod.domain.moderation.service.backfill import BackfillService
from contentmod.domain.shared.event import EventHandler


class RunBackfill(EventHandler[BackfillRequested]):
    """Processes one backfill batch; the service enqueues the next one."""

    service: BackfillService

    async def handle(self, event: BackfillRequested) -> None:
        await self.service.run_batch(
            start_after=event.start_after,
            processed_total=event.processed_total,
        )
