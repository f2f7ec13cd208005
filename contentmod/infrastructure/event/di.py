"""Dependency injection provider for the event system."""

import logging
from typing import Any, NewType

import httpx
from dishka import AsyncContainer, provide

from contentmod.config import Config
from contentmod.domain.moderation.handler import (
    ModerateOnCreate,
    RunBackfill,
    TriggerBackfillOnInstall,
)
from contentmod.domain.moderation.service.emitter import ModerationEventEmitter
from contentmod.domain.shared.event import EventHandler
from contentmod.domain.shared.model.subscription_registry import SubscriptionRegistry
from contentmod.domain.shared.outbox import Outbox
from contentmod.domain.shared.port.event_repository import EventRepository
from contentmod.infrastructure.event.memory_repository import InMemoryEventRepository
from contentmod.infrastructure.event.publisher import HttpEventPublisher
from contentmod.infrastructure.event.worker import Worker
from contentmod.util.di.base import Provider
from contentmod.util.di.scope import Scope

logger = logging.getLogger(__name__)

HandlerTypes = NewType("HandlerTypes", list[type[EventHandler[Any]]])

# All event handlers, in registration order
HANDLERS: HandlerTypes = HandlerTypes(
    [
        ModerateOnCreate,
        TriggerBackfillOnInstall,
        RunBackfill,
    ]
)


def build_subscription_registry(handlers: HandlerTypes) -> SubscriptionRegistry:
    """Map each handler's __event_type__.__name__ to the handler names consuming it."""
    registry = SubscriptionRegistry()
    for handler in handlers:
        registry.setdefault(handler.__event_type__.__name__, set()).add(handler.__name__)
    return registry


class EventProvider(Provider):
    """Provides event system components.

    Handlers and the Outbox are UOW-scoped. The event queue, the
    subscription registry, the emitter and the worker are APP-scoped.
    """

    event_repository = provide(
        InMemoryEventRepository, scope=Scope.APP, provides=EventRepository
    )

    @provide(scope=Scope.UOW)
    def get_outbox(self, repo: EventRepository, registry: SubscriptionRegistry) -> Outbox:
        return Outbox(repo, registry)

    # UOW-scoped providers for handlers
    for _handler_type in HANDLERS:
        locals()[_handler_type.__name__] = provide(_handler_type, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_handler_types(self) -> HandlerTypes:
        return HANDLERS

    @provide(scope=Scope.APP)
    def get_subscription_registry(self, handler_types: HandlerTypes) -> SubscriptionRegistry:
        registry = build_subscription_registry(handler_types)
        logger.debug(f"Built subscription registry: {len(registry)} event types")
        return registry

    @provide(scope=Scope.APP)
    def get_emitter(self, config: Config, client: httpx.AsyncClient) -> ModerationEventEmitter:
        """Emitter with no publisher when events are disabled or no channel is set."""
        if not config.events_enabled:
            return ModerationEventEmitter(publisher=None)
        return ModerationEventEmitter(
            publisher=HttpEventPublisher(
                client=client,
                channel_url=config.events.channel_url,
                auth_token=config.events.auth_token,
            )
        )

    @provide(scope=Scope.APP)
    def get_worker(
        self,
        container: AsyncContainer,
        repo: EventRepository,
        handler_types: HandlerTypes,
    ) -> Worker:
        return Worker(container=container, repo=repo, handler_types=handler_types)
