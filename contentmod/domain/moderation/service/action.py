"""ActionEngine - applies the configured moderation policy to a record."""

import logging

from contentmod.config import Config
from contentmod.domain.moderation.model.value import (
    ActionOutcome,
    ModerationAction,
    ModerationMetadata,
    ModerationResult,
    OutcomeKind,
)
from contentmod.domain.moderation.port.record_store import RecordStore
from contentmod.domain.shared.service import Service

logger = logging.getLogger(__name__)


class ActionEngine(Service):
    """Writes moderation metadata and enforces the configured action.

    - flag: always write metadata; visibility untouched
    - hide: write metadata, plus `hidden = true` when flagged
    - delete: remove flagged records entirely; approved ones get metadata

    Re-applying the same result is harmless for flag and hide. A deleted
    record has no metadata left, so it can never be skipped by the guard.
    """

    config: Config
    store: RecordStore

    async def apply(self, path: str, result: ModerationResult) -> ActionOutcome:
        metadata = ModerationMetadata.from_result(result)
        fields = {self.config.moderation_field: metadata.to_document()}

        match self.config.action:
            case ModerationAction.DELETE:
                if result.flagged:
                    logger.info(f"Deleting flagged document: {path}")
                    await self.store.delete(path)
                    return ActionOutcome(action=OutcomeKind.DELETED)
                await self.store.merge(path, fields)
                return ActionOutcome(action=OutcomeKind.APPROVED)

            case ModerationAction.HIDE:
                if result.flagged:
                    fields["hidden"] = True
                await self.store.merge(path, fields)
                return ActionOutcome(
                    action=OutcomeKind.HIDDEN if result.flagged else OutcomeKind.APPROVED
                )

            case _:
                await self.store.merge(path, fields)
                return ActionOutcome(
                    action=OutcomeKind.FLAGGED if result.flagged else OutcomeKind.APPROVED
                )
