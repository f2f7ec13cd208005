from dishka import provide

from contentmod.domain.moderation.service import (
    ActionEngine,
    BackfillService,
    ModerationService,
)
from contentmod.util.di.base import Provider
from contentmod.util.di.scope import Scope


class ModerationDomainProvider(Provider):
    action_engine = provide(ActionEngine, scope=Scope.UOW)
    moderation_service = provide(ModerationService, scope=Scope.UOW)
    backfill_service = provide(BackfillService, scope=Scope.UOW)
