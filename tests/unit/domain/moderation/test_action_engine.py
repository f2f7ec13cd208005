"""Unit tests for ActionEngine."""

import pytest

from contentmod.domain.moderation.model.value import (
    MODERATION_VERSION,
    ModerationResult,
    OutcomeKind,
)
from contentmod.domain.moderation.service.action import ActionEngine

PATH = "posts/p1"


def make_result(flagged: bool) -> ModerationResult:
    return ModerationResult(
        flagged=flagged,
        score=0.8 if flagged else 0.1,
        categories={"blocklist": flagged},
        category_scores={"blocklist": 0.8 if flagged else 0.0},
        provider="local",
        reason="blocklist" if flagged else "",
    )


class TestActionEngineFlag:
    @pytest.mark.asyncio
    async def test_flagged_writes_metadata(self, make_config, store):
        await store.create(PATH, {"text": "hello", "author": "ada"})
        engine = ActionEngine(config=make_config(action="flag"), store=store)

        outcome = await engine.apply(PATH, make_result(flagged=True))

        assert outcome.action == OutcomeKind.FLAGGED
        data = store.records[PATH]
        assert data["moderation"]["status"] == "flagged"
        assert data["moderation"]["version"] == MODERATION_VERSION
        assert data["author"] == "ada"
        assert "hidden" not in data

    @pytest.mark.asyncio
    async def test_approved_writes_metadata(self, make_config, store):
        await store.create(PATH, {"text": "hello"})
        engine = ActionEngine(config=make_config(action="flag"), store=store)

        outcome = await engine.apply(PATH, make_result(flagged=False))

        assert outcome.action == OutcomeKind.APPROVED
        assert store.records[PATH]["moderation"]["status"] == "approved"

    @pytest.mark.asyncio
    async def test_reapplying_is_idempotent(self, make_config, store):
        await store.create(PATH, {"text": "hello"})
        engine = ActionEngine(config=make_config(action="flag"), store=store)

        await engine.apply(PATH, make_result(flagged=True))
        first = {k: v for k, v in store.records[PATH]["moderation"].items() if k != "timestamp"}
        await engine.apply(PATH, make_result(flagged=True))
        second = {k: v for k, v in store.records[PATH]["moderation"].items() if k != "timestamp"}

        assert first == second


class TestActionEngineHide:
    @pytest.mark.asyncio
    async def test_flagged_is_hidden(self, make_config, store):
        await store.create(PATH, {"text": "hello"})
        engine = ActionEngine(config=make_config(action="hide"), store=store)

        outcome = await engine.apply(PATH, make_result(flagged=True))

        assert outcome.action == OutcomeKind.HIDDEN
        assert store.records[PATH]["hidden"] is True
        assert store.records[PATH]["moderation"]["status"] == "flagged"

    @pytest.mark.asyncio
    async def test_approved_is_not_hidden(self, make_config, store):
        await store.create(PATH, {"text": "hello"})
        engine = ActionEngine(config=make_config(action="hide"), store=store)

        outcome = await engine.apply(PATH, make_result(flagged=False))

        assert outcome.action == OutcomeKind.APPROVED
        assert "hidden" not in store.records[PATH]


class TestActionEngineDelete:
    @pytest.mark.asyncio
    async def test_flagged_is_deleted(self, make_config, store):
        await store.create(PATH, {"text": "hello"})
        engine = ActionEngine(config=make_config(action="delete"), store=store)

        outcome = await engine.apply(PATH, make_result(flagged=True))

        assert outcome.action == OutcomeKind.DELETED
        assert PATH not in store.records
        assert store.deleted == [PATH]

    @pytest.mark.asyncio
    async def test_approved_is_kept_with_metadata(self, make_config, store):
        await store.create(PATH, {"text": "hello"})
        engine = ActionEngine(config=make_config(action="delete"), store=store)

        outcome = await engine.apply(PATH, make_result(flagged=False))

        assert outcome.action == OutcomeKind.APPROVED
        assert store.records[PATH]["moderation"]["status"] == "approved"
        assert store.deleted == []
