"""ModerationProvider port - scoring backend contract."""

from abc import abstractmethod
from typing import Protocol

from contentmod.domain.moderation.model.value import ModerationResult
from contentmod.domain.shared.port import Port


class ModerationProvider(Port, Protocol):
    """Scores text and returns a normalized ModerationResult.

    Credentials (or the blocklist, for the local engine) are bound when the
    provider is built. Implementations raise ConfigurationError for missing
    credentials and ProviderError for anything the backend gets wrong; a
    backend failure is never reported as an approval.
    """

    name: str

    @abstractmethod
    async def moderate(self, text: str, sensitivity: float) -> ModerationResult: ...
