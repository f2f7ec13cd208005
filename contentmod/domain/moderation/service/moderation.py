"""ModerationService - real-time moderation of newly created records."""

import logging
from typing import Any

import logfire

from contentmod.config import Config
from contentmod.domain.moderation.model.value import (
    ModerationMetadata,
    ModerationRun,
    ModerationStatus,
)
from contentmod.domain.moderation.port.provider import ModerationProvider
from contentmod.domain.moderation.port.record_store import RecordStore
from contentmod.domain.moderation.service.action import ActionEngine
from contentmod.domain.moderation.service.emitter import ModerationEventEmitter
from contentmod.domain.moderation.service.guard import should_skip
from contentmod.domain.shared.error import NotFoundError, ValidationError
from contentmod.domain.shared.service import Service

logger = logging.getLogger(__name__)


def extract_text(data: dict[str, Any], field: str) -> str:
    """Return the text to moderate.

    Raises:
        ValidationError: If the field is missing, empty or not a string.
    """
    text = data.get(field)
    if not text or not isinstance(text, str):
        raise ValidationError(f'No text found in field "{field}"', field=field)
    return text


class ModerationService(Service):
    """Runs guard -> provider -> action engine -> events for a single record.

    Skipped content is recorded as `skipped`. Provider and configuration
    failures are recorded as `error` (with the current version, so they are
    not retried by later scans) and then re-raised to the caller.
    """

    config: Config
    store: RecordStore
    provider: ModerationProvider
    action_engine: ActionEngine
    emitter: ModerationEventEmitter

    async def moderate_record(self, path: str, data: dict[str, Any]) -> ModerationRun:
        field = self.config.moderation_field
        logger.info(f"Processing new document: {path}")

        if should_skip(data.get(field)):
            logger.info(f"Skipping already processed document: {path}")
            return ModerationRun(path=path)

        try:
            text = extract_text(data, self.config.text_field)
        except ValidationError as e:
            logger.warning(f"{e.message} for document: {path}")
            await self.store.merge(
                path, {field: ModerationMetadata.skipped("No text content found").to_document()}
            )
            return ModerationRun(path=path, status=ModerationStatus.SKIPPED)

        with logfire.span("moderate_record", path=path, provider=self.provider.name):
            try:
                logger.info(f"Evaluating content with {self.provider.name} provider")
                result = await self.provider.moderate(text, self.config.sensitivity)
                logger.info(f"Moderation result: flagged={result.flagged}, score={result.score}")
                outcome = await self.action_engine.apply(path, result)
            except Exception as e:
                logger.error(f"Moderation failed for {path}: {e}")
                await self.store.merge(path, {field: ModerationMetadata.failed(str(e)).to_document()})
                raise

            logfire.info(
                "Record moderated", path=path, flagged=result.flagged, action=outcome.action.value
            )

        await self.emitter.emit(path, result, outcome)

        return ModerationRun(
            path=path,
            status=ModerationStatus.FLAGGED if result.flagged else ModerationStatus.APPROVED,
            result=result,
            outcome=outcome,
        )

    async def moderate_path(self, path: str) -> ModerationRun:
        """Run the real-time path against a record already in the store."""
        record = await self.store.get(path)
        if record is None:
            raise NotFoundError(f"Record not found: {path}")
        return await self.moderate_record(record.path, record.data)
