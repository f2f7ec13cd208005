"""Real-time moderation commands: add a record, or re-run moderation on one."""

import asyncio
from uuid import uuid4

import cyclopts

from contentmod.cli.console import Console
from contentmod.cli.runtime import app_container, drain, load_config
from contentmod.domain.moderation.event.content_created import ContentCreated
from contentmod.domain.moderation.model.value import ModerationRun
from contentmod.domain.moderation.port.record_store import RecordStore
from contentmod.domain.moderation.service.moderation import ModerationService
from contentmod.domain.shared.error import ModerationError
from contentmod.domain.shared.event import EventId
from contentmod.domain.shared.outbox import Outbox
from contentmod.util.di.scope import Scope

app = cyclopts.App(name="records", help="Create and moderate records")


async def _add(doc_id: str, text: str) -> dict | None:
    config = load_config()
    path = f"{config.collection_path}/{doc_id}"
    async with app_container(config) as container:
        async with container(scope=Scope.UOW) as scope:
            store = await scope.get(RecordStore)
            outbox = await scope.get(Outbox)
            record = await store.create(path, {config.text_field: text})
            await outbox.append(ContentCreated(id=EventId(uuid4()), path=path, data=record.data))

        await drain(container)

        async with container(scope=Scope.UOW) as scope:
            store = await scope.get(RecordStore)
            stored = await store.get(path)
            return stored.get(config.moderation_field) if stored else None


async def _moderate(path: str) -> ModerationRun:
    config = load_config()
    async with app_container(config) as container:
        async with container(scope=Scope.UOW) as scope:
            service = await scope.get(ModerationService)
            return await service.moderate_path(path)


@app.command
def add(doc_id: str, text: str, /) -> None:
    """Create a record in the moderated collection and moderate it.

    Args:
        doc_id: Document id within the collection.
        text: Value of the text field.
    """
    console = Console()
    metadata = asyncio.run(_add(doc_id, text))
    if metadata is None:
        console.warning(f"{doc_id}: record was deleted by moderation")
        return
    console.print(metadata)


@app.command
def moderate(path: str, /) -> None:
    """Run real-time moderation on an existing record.

    Args:
        path: Record path, e.g. "comments/abc123".
    """
    console = Console()
    try:
        run = asyncio.run(_moderate(path))
    except ModerationError as e:
        console.error(e.message, hint=e.code)
        raise SystemExit(1) from e
    console.moderation_run(run)
