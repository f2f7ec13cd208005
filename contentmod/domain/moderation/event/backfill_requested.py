"""BackfillRequested event - task message for one backfill batch."""

from contentmod.domain.shared.event import Event, EventId


class BackfillRequested(Event):
    """Emitted to start a backfill scan, and by each full batch to continue it.

    - `start_after`: path of the last record examined by the previous batch
      (None for the first batch)
    - `processed_total`: records moderated by earlier batches of this scan
    """

    id: EventId
    start_after: str | None = None
    processed_total: int = 0
