"""Unit tests for BackfillService."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from contentmod.domain.moderation.event.backfill_completed import BackfillCompleted
from contentmod.domain.moderation.event.backfill_requested import BackfillRequested
from contentmod.domain.moderation.model.value import MODERATION_VERSION, ModerationResult
from contentmod.domain.moderation.service.action import ActionEngine
from contentmod.domain.moderation.service.backfill import (
    BATCH_SIZE,
    BackfillService,
    BackfillState,
)
from contentmod.domain.shared.error import ProviderError
from contentmod.domain.shared.outbox import Outbox
from contentmod.infrastructure.classifier.local import LocalModerationProvider


@pytest.fixture
def mock_outbox() -> Outbox:
    """Create a mock Outbox."""
    outbox = MagicMock(spec=Outbox)
    outbox.append = AsyncMock()
    return outbox


def make_service(config, store, outbox, provider=None) -> BackfillService:
    return BackfillService(
        config=config,
        store=store,
        provider=provider or LocalModerationProvider(blocklist="hate"),
        action_engine=ActionEngine(config=config, store=store),
        outbox=outbox,
    )


async def seed(store, count: int, prefix: str = "posts/p") -> list[str]:
    paths = [f"{prefix}{i:03d}" for i in range(count)]
    for path in paths:
        await store.create(path, {"text": f"post {path}"})
    return paths


def appended(outbox) -> list:
    return [c.args[0] for c in outbox.append.call_args_list]


class TestRunBatch:
    @pytest.mark.asyncio
    async def test_disabled_reports_skip_without_touching_store(
        self, make_config, store, mock_outbox
    ):
        await seed(store, 3)
        service = make_service(make_config(do_backfill=False), store, mock_outbox)

        result = await service.run_batch()

        assert result.state == BackfillState.COMPLETE
        assert result.message == "Backfill skipped per configuration."
        assert all("moderation" not in data for data in store.records.values())
        [event] = appended(mock_outbox)
        assert isinstance(event, BackfillCompleted)
        assert event.skipped is True

    @pytest.mark.asyncio
    async def test_empty_collection_completes(self, make_config, store, mock_outbox):
        service = make_service(make_config(do_backfill=True), store, mock_outbox)

        result = await service.run_batch()

        assert result.state == BackfillState.COMPLETE
        assert result.message == "Backfill complete."
        [event] = appended(mock_outbox)
        assert isinstance(event, BackfillCompleted)
        assert event.skipped is False

    @pytest.mark.asyncio
    async def test_full_batch_enqueues_continuation(self, make_config, store, mock_outbox):
        paths = await seed(store, 45)
        service = make_service(make_config(do_backfill=True), store, mock_outbox)

        result = await service.run_batch()

        assert result.state == BackfillState.CONTINUED
        assert result.processed == BATCH_SIZE
        assert result.cursor == paths[BATCH_SIZE - 1]
        [event] = appended(mock_outbox)
        assert isinstance(event, BackfillRequested)
        assert event.start_after == paths[BATCH_SIZE - 1]
        assert event.processed_total == BATCH_SIZE
        # Only the first batch was touched
        assert "moderation" in store.records[paths[BATCH_SIZE - 1]]
        assert "moderation" not in store.records[paths[BATCH_SIZE]]

    @pytest.mark.asyncio
    async def test_short_batch_completes_with_totals(self, make_config, store, mock_outbox):
        paths = await seed(store, 45)
        service = make_service(make_config(do_backfill=True), store, mock_outbox)

        result = await service.run_batch(start_after=paths[39], processed_total=40)

        assert result.state == BackfillState.COMPLETE
        assert result.processed == 5
        assert result.processed_total == 45
        assert result.message == (
            "Backfill complete. Processed 5 documents in final batch (45 in total)."
        )

    @pytest.mark.asyncio
    async def test_exact_multiple_needs_one_empty_batch(self, make_config, store, mock_outbox):
        paths = await seed(store, BATCH_SIZE)
        service = make_service(make_config(do_backfill=True), store, mock_outbox)

        first = await service.run_batch()
        second = await service.run_batch(
            start_after=first.cursor, processed_total=first.processed_total
        )

        assert first.state == BackfillState.CONTINUED
        assert first.cursor == paths[-1]
        assert second.state == BackfillState.COMPLETE
        assert second.processed_total == BATCH_SIZE

    @pytest.mark.asyncio
    async def test_chain_terminates_with_single_completion(self, make_config, store, mock_outbox):
        await seed(store, 47)
        service = make_service(make_config(do_backfill=True), store, mock_outbox)

        result = await service.run_batch()
        batches = 1
        while result.state == BackfillState.CONTINUED:
            request = appended(mock_outbox)[-1]
            result = await service.run_batch(request.start_after, request.processed_total)
            batches += 1

        assert batches == 3
        assert result.processed_total == 47
        completions = [e for e in appended(mock_outbox) if isinstance(e, BackfillCompleted)]
        assert len(completions) == 1
        assert all(
            data["moderation"]["version"] == MODERATION_VERSION for data in store.records.values()
        )

    @pytest.mark.asyncio
    async def test_already_processed_records_are_not_rescored(
        self, make_config, store, mock_outbox
    ):
        done = {"processed": True, "version": MODERATION_VERSION, "status": "approved"}
        await store.create("posts/a", {"text": "hate", "moderation": done})
        await store.create("posts/b", {"text": "hello"})
        service = make_service(make_config(do_backfill=True), store, mock_outbox)

        result = await service.run_batch()

        assert result.processed == 1
        assert result.cursor == "posts/b"
        assert store.records["posts/a"]["moderation"] == done

    @pytest.mark.asyncio
    async def test_records_without_text_are_passed_over(self, make_config, store, mock_outbox):
        await store.create("posts/a", {"title": "no body"})
        await store.create("posts/b", {"text": "hello"})
        service = make_service(make_config(do_backfill=True), store, mock_outbox)

        result = await service.run_batch()

        assert result.processed == 1
        assert "moderation" not in store.records["posts/a"]

    @pytest.mark.asyncio
    async def test_other_collections_untouched(self, make_config, store, mock_outbox):
        await seed(store, 2)
        await store.create("comments/c1", {"text": "hello"})
        service = make_service(make_config(do_backfill=True), store, mock_outbox)

        result = await service.run_batch()

        assert result.processed == 2
        assert "moderation" not in store.records["comments/c1"]

    @pytest.mark.asyncio
    async def test_vanished_cursor_restarts_from_beginning(
        self, make_config, store, mock_outbox
    ):
        paths = await seed(store, 3)
        service = make_service(make_config(do_backfill=True), store, mock_outbox)

        result = await service.run_batch(start_after="posts/gone", processed_total=20)

        assert result.state == BackfillState.COMPLETE
        assert result.processed == 3
        assert result.processed_total == 23
        assert all("moderation" in store.records[p] for p in paths)

    @pytest.mark.asyncio
    async def test_record_failure_does_not_stop_batch(self, make_config, store, mock_outbox):
        await store.create("posts/a", {"text": "ok"})
        await store.create("posts/b", {"text": "boom"})
        await store.create("posts/c", {"text": "ok"})

        async def moderate(text: str, sensitivity: float) -> ModerationResult:
            if text == "boom":
                raise ProviderError("backend exploded", provider="fake")
            return ModerationResult(flagged=False, score=0.0, provider="fake")

        provider = AsyncMock()
        provider.name = "fake"
        provider.moderate.side_effect = moderate
        service = make_service(make_config(do_backfill=True), store, mock_outbox, provider)

        result = await service.run_batch()

        assert result.state == BackfillState.COMPLETE
        assert result.processed == 2
        assert result.cursor == "posts/c"
        # Failed records keep no metadata so the next scan retries them
        assert "moderation" not in store.records["posts/b"]
        assert store.records["posts/c"]["moderation"]["status"] == "approved"

    @pytest.mark.asyncio
    async def test_delete_action_removes_flagged_records(self, make_config, store, mock_outbox):
        await store.create("posts/a", {"text": "I hate this"})
        await store.create("posts/b", {"text": "lovely"})
        service = make_service(
            make_config(do_backfill=True, action="delete"), store, mock_outbox
        )

        result = await service.run_batch()

        assert result.processed == 2
        assert "posts/a" not in store.records
        assert store.records["posts/b"]["moderation"]["status"] == "approved"
