"""BackfillCompleted event - terminal state of a backfill scan."""

from contentmod.domain.shared.event import Event, EventId


class BackfillCompleted(Event):
    """Emitted exactly once per scan, when the last batch finishes or backfill is disabled."""

    id: EventId
    processed_total: int
    skipped: bool = False  # True when backfill is disabled by configuration
    message: str
