"""Moderation domain events."""

from contentmod.domain.moderation.event.backfill_completed import BackfillCompleted
from contentmod.domain.moderation.event.backfill_requested import BackfillRequested
from contentmod.domain.moderation.event.content_created import ContentCreated

__all__ = ["BackfillCompleted", "BackfillRequested", "ContentCreated"]
