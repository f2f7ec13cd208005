from dishka import AsyncContainer, from_context, make_async_container

from contentmod.config import Config
from contentmod.domain.moderation.util.di import ModerationDomainProvider
from contentmod.infrastructure.classifier.di import ClassifierProvider
from contentmod.infrastructure.event import EventProvider
from contentmod.infrastructure.persistence import PersistenceProvider
from contentmod.util.di.base import Provider
from contentmod.util.di.scope import Scope


class ConfigProvider(Provider):
    config = from_context(provides=Config, scope=Scope.APP)


def create_container(config: Config | None = None) -> AsyncContainer:
    if config is None:
        # Pydantic Settings populates from env vars at runtime
        config = Config()  # type: ignore[call-arg]

    return make_async_container(
        ConfigProvider(),
        PersistenceProvider(),
        ClassifierProvider(),
        EventProvider(),
        ModerationDomainProvider(),
        context={Config: config},
        scopes=Scope,  # type: ignore[arg-type]  # Custom scope class
    )
