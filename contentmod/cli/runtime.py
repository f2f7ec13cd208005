"""Shared plumbing for CLI commands that need the DI container."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from dishka import AsyncContainer

from contentmod.application.di import create_container
from contentmod.config import Config, configure_logging
from contentmod.infrastructure.event.worker import Worker


def load_config() -> Config:
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    return config


@asynccontextmanager
async def app_container(config: Config) -> AsyncIterator[AsyncContainer]:
    container = create_container(config)
    try:
        yield container
    finally:
        await container.close()


async def drain(container: AsyncContainer) -> int:
    """Run the worker until no deliveries are pending."""
    worker = await container.get(Worker)
    return await worker.run_until_idle()
