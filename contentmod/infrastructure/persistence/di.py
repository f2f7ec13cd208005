from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from contentmod.config import Config
from contentmod.domain.moderation.port.record_store import RecordStore
from contentmod.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
    create_tables,
)
from contentmod.infrastructure.persistence.repository.record import SqlAlchemyRecordStore
from contentmod.util.di.base import Provider
from contentmod.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        if config.database.create_tables:
            await create_tables(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    record_store = provide(SqlAlchemyRecordStore, scope=Scope.UOW, provides=RecordStore)
