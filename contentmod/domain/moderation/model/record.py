from typing import Any

from contentmod.domain.shared.model.entity import Entity


class Record(Entity):
    """A document in the moderated collection.

    `path` is "<collection>/<doc id>" and doubles as the stable ordering key
    for backfill scans.
    """

    path: str
    data: dict[str, Any]

    def get(self, field: str) -> Any:
        return self.data.get(field)
