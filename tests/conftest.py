"""Global test fixtures."""

import os
from collections.abc import Callable
from typing import Any

import pytest

from contentmod.config import Config
from contentmod.domain.moderation.model.record import Record
from contentmod.domain.moderation.port.record_store import RecordStore
from contentmod.domain.shared.error import NotFoundError

# A developer's YAML config must not leak into test settings.
# This must happen at module load time, not in a fixture
os.environ.pop("CONTENTMOD_CONFIG_FILE", None)


class InMemoryRecordStore(RecordStore):
    """Dict-backed RecordStore with the same ordering rules as the SQL store."""

    def __init__(self, records: dict[str, dict[str, Any]] | None = None) -> None:
        self.records: dict[str, dict[str, Any]] = dict(records or {})
        self.deleted: list[str] = []

    async def create(self, path: str, data: dict[str, Any]) -> Record:
        self.records[path] = dict(data)
        return Record(path=path, data=dict(data))

    async def get(self, path: str) -> Record | None:
        data = self.records.get(path)
        return Record(path=path, data=dict(data)) if data is not None else None

    async def exists(self, path: str) -> bool:
        return path in self.records

    async def merge(self, path: str, fields: dict[str, Any]) -> None:
        if path not in self.records:
            raise NotFoundError(f"Record not found: {path}")
        self.records[path] = {**self.records[path], **fields}

    async def delete(self, path: str) -> None:
        self.records.pop(path, None)
        self.deleted.append(path)

    async def list_after(
        self, collection: str, start_after: str | None, limit: int
    ) -> list[Record]:
        paths = sorted(
            p
            for p in self.records
            if p.rpartition("/")[0] == collection and (start_after is None or p > start_after)
        )
        return [Record(path=p, data=dict(self.records[p])) for p in paths[:limit]]


@pytest.fixture
def store() -> InMemoryRecordStore:
    return InMemoryRecordStore()


@pytest.fixture
def make_config() -> Callable[..., Config]:
    """Build a Config for the "posts" collection, with overrides."""

    def _make(**overrides: Any) -> Config:
        values: dict[str, Any] = {"collection_path": "posts", "text_field": "text"}
        values.update(overrides)
        return Config(**values)

    return _make


@pytest.fixture
def config(make_config: Callable[..., Config]) -> Config:
    return make_config()
