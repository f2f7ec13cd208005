"""SQLAlchemy implementation of RecordStore."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from contentmod.domain.moderation.model.record import Record
from contentmod.domain.moderation.port.record_store import RecordStore
from contentmod.domain.shared.error import NotFoundError
from contentmod.infrastructure.persistence.tables import documents_table


def _collection_of(path: str) -> str:
    collection, _, doc_id = path.rpartition("/")
    if not collection or not doc_id:
        raise ValueError(f"Invalid document path: {path!r}")
    return collection


def _row_to_record(row: Any) -> Record:
    return Record(path=row["path"], data=dict(row["data"]))


class SqlAlchemyRecordStore(RecordStore):
    """Documents stored as JSON rows, one row per record path."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create(self, path: str, data: dict[str, Any]) -> Record:
        now = datetime.now(UTC)
        stmt = insert(documents_table).values(
            path=path,
            collection=_collection_of(path),
            data=data,
            created_at=now,
            updated_at=now,
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return Record(path=path, data=dict(data))

    async def get(self, path: str) -> Record | None:
        stmt = select(documents_table).where(documents_table.c.path == path)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_record(row) if row else None

    async def exists(self, path: str) -> bool:
        stmt = select(documents_table.c.path).where(documents_table.c.path == path)
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def merge(self, path: str, fields: dict[str, Any]) -> None:
        """Top-level merge; raises NotFoundError for a missing record."""
        record = await self.get(path)
        if record is None:
            raise NotFoundError(f"Record not found: {path}")

        data = {**record.data, **fields}
        stmt = (
            update(documents_table)
            .where(documents_table.c.path == path)
            .values(data=data, updated_at=datetime.now(UTC))
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete(self, path: str) -> None:
        stmt = delete(documents_table).where(documents_table.c.path == path)
        await self.session.execute(stmt)
        await self.session.flush()

    async def list_after(
        self, collection: str, start_after: str | None, limit: int
    ) -> list[Record]:
        stmt = select(documents_table).where(documents_table.c.collection == collection)
        if start_after is not None:
            stmt = stmt.where(documents_table.c.path > start_after)
        stmt = stmt.order_by(documents_table.c.path).limit(limit)

        result = await self.session.execute(stmt)
        return [_row_to_record(row) for row in result.mappings().all()]
