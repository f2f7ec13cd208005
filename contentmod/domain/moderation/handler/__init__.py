"""Moderation domain event handlers."""

from contentmod.domain.moderation.handler.moderate_on_create import ModerateOnCreate
from contentmod.domain.moderation.handler.run_backfill import RunBackfill
from contentmod.domain.moderation.handler.trigger_backfill_on_install import (
    TriggerBackfillOnInstall,
)

__all__ = ["ModerateOnCreate", "RunBackfill", "TriggerBackfillOnInstall"]
