"""ContentCreated event - a new record appeared in the moderated collection."""

from typing import Any

from contentmod.domain.shared.event import Event, EventId


class ContentCreated(Event):
    """Emitted by the store trigger with the record's field values at creation time."""

    id: EventId
    path: str
    data: dict[str, Any]
