"""EventPublisher port - outbound notification channel."""

from abc import abstractmethod
from typing import Any, Protocol

from contentmod.domain.shared.port import Port


class EventPublisher(Port, Protocol):
    @abstractmethod
    async def publish(self, event_type: str, subject: str, data: dict[str, Any]) -> None:
        """Publish one event envelope.

        Raises:
            EventPublishError: If the channel rejects or cannot be reached.
        """
        ...
