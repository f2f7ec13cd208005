"""HTTP adapter for the EventPublisher port."""

import logging
from typing import Any

import httpx

from contentmod.domain.moderation.port.event_publisher import EventPublisher
from contentmod.domain.shared.error import EventPublishError

logger = logging.getLogger(__name__)


class HttpEventPublisher(EventPublisher):
    """POSTs `{type, subject, data}` envelopes to the configured channel URL."""

    def __init__(self, client: httpx.AsyncClient, channel_url: str, auth_token: str = "") -> None:
        self._client = client
        self._channel_url = channel_url
        self._auth_token = auth_token

    async def publish(self, event_type: str, subject: str, data: dict[str, Any]) -> None:
        headers = {"Authorization": f"Bearer {self._auth_token}"} if self._auth_token else {}
        envelope = {"type": event_type, "subject": subject, "data": data}

        try:
            response = await self._client.post(self._channel_url, json=envelope, headers=headers)
        except httpx.HTTPError as e:
            raise EventPublishError(f"Event channel unreachable: {e}") from e

        if response.is_error:
            raise EventPublishError(
                f"Event channel rejected {event_type}: {response.status_code} - {response.text}"
            )
        logger.debug(f"Published {event_type} for {subject}")
