"""Backfill commands."""

import asyncio
from uuid import uuid4

import cyclopts

from contentmod.application.event import ExtensionInstalled
from contentmod.cli.console import Console
from contentmod.cli.runtime import app_container, drain, load_config
from contentmod.domain.moderation.event.backfill_completed import BackfillCompleted
from contentmod.domain.moderation.event.backfill_requested import BackfillRequested
from contentmod.domain.shared.event import Event, EventId
from contentmod.domain.shared.outbox import Outbox
from contentmod.util.di.scope import Scope

app = cyclopts.App(name="backfill", help="Moderate pre-existing records")


async def _run_chain(initial: Event) -> tuple[int, BackfillCompleted | None]:
    config = load_config()
    async with app_container(config) as container:
        async with container(scope=Scope.UOW) as scope:
            outbox = await scope.get(Outbox)
            await outbox.append(initial)

        deliveries = await drain(container)

        async with container(scope=Scope.UOW) as scope:
            outbox = await scope.get(Outbox)
            return deliveries, await outbox.find_latest(BackfillCompleted)


def _report(deliveries: int, completed: BackfillCompleted | None) -> None:
    console = Console()
    console.info(f"{deliveries} deliveries processed")
    if completed is None:
        console.error("Backfill did not reach a terminal state")
        raise SystemExit(1)
    if completed.skipped:
        console.warning(completed.message)
    else:
        console.success(completed.message)


@app.default
def backfill(*, start_after: str | None = None) -> None:
    """Run the backfill scan to completion.

    Args:
        start_after: Resume after this record path instead of the beginning.
    """
    event = BackfillRequested(id=EventId(uuid4()), start_after=start_after)
    _report(*asyncio.run(_run_chain(event)))


@app.command
def install() -> None:
    """Emit the install lifecycle event (starts a backfill when enabled)."""
    _report(*asyncio.run(_run_chain(ExtensionInstalled(id=EventId(uuid4())))))
