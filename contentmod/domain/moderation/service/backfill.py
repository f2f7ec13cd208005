"""BackfillService - moderates pre-existing records in bounded, chained batches."""

import logging
from dataclasses import dataclass
from enum import StrEnum
from uuid import uuid4

import logfire

from contentmod.config import Config
from contentmod.domain.moderation.event.backfill_completed import BackfillCompleted
from contentmod.domain.moderation.event.backfill_requested import BackfillRequested
from contentmod.domain.moderation.port.provider import ModerationProvider
from contentmod.domain.moderation.port.record_store import RecordStore
from contentmod.domain.moderation.service.action import ActionEngine
from contentmod.domain.moderation.service.guard import should_skip
from contentmod.domain.moderation.service.moderation import extract_text
from contentmod.domain.shared.error import ValidationError
from contentmod.domain.shared.event import EventId
from contentmod.domain.shared.outbox import Outbox
from contentmod.domain.shared.service import Service

logger = logging.getLogger(__name__)

BATCH_SIZE = 20


class BackfillState(StrEnum):
    CONTINUED = "continued"  # A follow-up batch was enqueued
    COMPLETE = "complete"  # Terminal: scan exhausted or backfill disabled


@dataclass
class BackfillResult:
    """Result of one backfill batch."""

    state: BackfillState
    processed: int  # Records moderated in this batch
    processed_total: int  # Records moderated by the scan so far
    cursor: str | None  # Path of the last record examined
    message: str = ""


class BackfillService(Service):
    """Sweeps the collection BATCH_SIZE records at a time.

    Each batch runs the records strictly in order, then either enqueues the
    next batch (a BackfillRequested carrying the cursor) or, when the fetch
    came back short, appends BackfillCompleted. Only one batch is ever in
    flight because each one is created by its predecessor.

    A per-record failure is logged and the batch moves on; the record keeps
    no error metadata, so the next scan will try it again.
    """

    config: Config
    store: RecordStore
    provider: ModerationProvider
    action_engine: ActionEngine
    outbox: Outbox

    async def run_batch(
        self,
        start_after: str | None = None,
        processed_total: int = 0,
    ) -> BackfillResult:
        """Process one batch of records following `start_after`.

        Args:
            start_after: Path of the last record seen by the previous batch.
            processed_total: Records moderated by previous batches.

        Returns:
            BackfillResult describing this batch.
        """
        if not self.config.do_backfill:
            logger.info("Backfill disabled by configuration")
            return await self._complete(
                processed=0,
                processed_total=processed_total,
                cursor=start_after,
                message="Backfill skipped per configuration.",
                skipped=True,
            )

        logger.info(f"Starting backfill batch, start_after: {start_after}")

        if start_after is not None and not await self.store.exists(start_after):
            # Records between the lost cursor and the restart point are
            # revisited; the guard keeps that from re-moderating them.
            logger.warning(
                f"Backfill cursor {start_after} no longer exists, restarting scan from the beginning"
            )
            start_after = None

        with logfire.span("backfill_batch", start_after=start_after):
            records = await self.store.list_after(
                self.config.collection_path, start_after, BATCH_SIZE
            )

            if not records:
                logger.info("Backfill complete - no more documents")
                return await self._complete(
                    processed=0,
                    processed_total=processed_total,
                    cursor=start_after,
                    message="Backfill complete.",
                )

            processed = 0
            cursor = start_after

            for record in records:
                cursor = record.path

                if should_skip(record.get(self.config.moderation_field)):
                    continue

                try:
                    text = extract_text(record.data, self.config.text_field)
                except ValidationError:
                    logger.debug(f"Backfill: no text in {record.path}, skipping")
                    continue

                try:
                    result = await self.provider.moderate(text, self.config.sensitivity)
                    await self.action_engine.apply(record.path, result)
                    processed += 1
                    logger.info(f"Processed document: {record.path}")
                except Exception as e:
                    logger.error(f"Processing failed for {record.path}: {e}")

        total = processed_total + processed
        logger.info(f"Batch complete: processed {processed} documents")

        if len(records) == BATCH_SIZE:
            await self.outbox.append(
                BackfillRequested(
                    id=EventId(uuid4()),
                    start_after=cursor,
                    processed_total=total,
                )
            )
            logger.info(f"Queued next batch starting after: {cursor}")
            return BackfillResult(
                state=BackfillState.CONTINUED,
                processed=processed,
                processed_total=total,
                cursor=cursor,
            )

        return await self._complete(
            processed=processed,
            processed_total=total,
            cursor=cursor,
            message=(
                f"Backfill complete. Processed {processed} documents in final batch "
                f"({total} in total)."
            ),
        )

    async def _complete(
        self,
        *,
        processed: int,
        processed_total: int,
        cursor: str | None,
        message: str,
        skipped: bool = False,
    ) -> BackfillResult:
        await self.outbox.append(
            BackfillCompleted(
                id=EventId(uuid4()),
                processed_total=processed_total,
                skipped=skipped,
                message=message,
            )
        )
        logfire.info("Backfill finished", processed_total=processed_total, skipped=skipped)
        return BackfillResult(
            state=BackfillState.COMPLETE,
            processed=processed,
            processed_total=processed_total,
            cursor=cursor,
            message=message,
        )
