"""ModerateOnCreate - handles ContentCreated events."""

from contentmod.domain.moderation.event.content_created import ContentCreated
from contentmod.domain.moderation.service.moderation import ModerationService
from contentmod.domain.shared.event import EventHandler


class ModerateOnCreate(EventHandler[ContentCreated]):
    """Runs the real-time moderation path for a newly created record."""

    service: ModerationService

    async def handle(self, event: ContentCreated) -> None:
        await self.service.moderate_record(event.path, event.data)
