"""RecordStore port - read/write primitives of the moderated document store."""

from abc import abstractmethod
from typing import Any, Protocol

from contentmod.domain.moderation.model.record import Record
from contentmod.domain.shared.port import Port


class RecordStore(Port, Protocol):
    @abstractmethod
    async def create(self, path: str, data: dict[str, Any]) -> Record: ...

    @abstractmethod
    async def get(self, path: str) -> Record | None: ...

    @abstractmethod
    async def exists(self, path: str) -> bool: ...

    @abstractmethod
    async def merge(self, path: str, fields: dict[str, Any]) -> None:
        """Overwrite the given top-level fields, leaving the others untouched."""
        ...

    @abstractmethod
    async def delete(self, path: str) -> None: ...

    @abstractmethod
    async def list_after(
        self, collection: str, start_after: str | None, limit: int
    ) -> list[Record]:
        """Records of a collection ordered by path, strictly after `start_after`."""
        ...
