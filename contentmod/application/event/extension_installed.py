from contentmod.domain.shared.event import Event, EventId


class ExtensionInstalled(Event):
    """Emitted once when the moderation extension is installed on a collection."""

    id: EventId
