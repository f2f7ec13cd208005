"""DI provider for scoring backends and the shared HTTP client."""

import logging
from typing import AsyncIterable

import httpx
from dishka import provide

from contentmod.config import Config
from contentmod.domain.moderation.port.provider import ModerationProvider
from contentmod.infrastructure.classifier.factory import build_provider
from contentmod.util.di.base import Provider
from contentmod.util.di.scope import Scope

logger = logging.getLogger(__name__)


class ClassifierProvider(Provider):
    @provide(scope=Scope.APP)
    async def get_http_client(self, config: Config) -> AsyncIterable[httpx.AsyncClient]:
        """HTTP client shared by the remote classifiers and the event channel."""
        timeout = httpx.Timeout(config.http.timeout, connect=config.http.connect_timeout)
        async with httpx.AsyncClient(timeout=timeout) as client:
            yield client

    @provide(scope=Scope.APP)
    def get_moderation_provider(
        self, config: Config, client: httpx.AsyncClient
    ) -> ModerationProvider:
        """Resolved once per application; an unknown name fails here."""
        provider = build_provider(config, client)
        logger.info(f"Using {provider.name} moderation provider")
        return provider
