"""Moderation domain services."""

from contentmod.domain.moderation.service.action import ActionEngine
from contentmod.domain.moderation.service.backfill import (
    BATCH_SIZE,
    BackfillResult,
    BackfillService,
    BackfillState,
)
from contentmod.domain.moderation.service.emitter import ModerationEventEmitter
from contentmod.domain.moderation.service.guard import should_skip
from contentmod.domain.moderation.service.moderation import ModerationService, extract_text

__all__ = [
    "BATCH_SIZE",
    "ActionEngine",
    "BackfillResult",
    "BackfillService",
    "BackfillState",
    "ModerationEventEmitter",
    "ModerationService",
    "extract_text",
    "should_skip",
]
