"""Resolves the configured provider name to a ModerationProvider."""

import httpx

from contentmod.config import Config
from contentmod.domain.moderation.model.value import ModerationResult
from contentmod.domain.moderation.port.provider import ModerationProvider
from contentmod.domain.shared.error import ConfigurationError
from contentmod.infrastructure.classifier.gemini import GeminiModerationProvider
from contentmod.infrastructure.classifier.local import LocalModerationProvider
from contentmod.infrastructure.classifier.openai import OpenAIModerationProvider

PROVIDER_NAMES = ("openai", "gemini", "local")


def build_provider(config: Config, client: httpx.AsyncClient) -> ModerationProvider:
    """Build the provider named by `config.provider`.

    Credentials are bound here but checked when the provider is called, so a
    missing key is recorded on the record that triggered the call.

    Raises:
        ConfigurationError: If the provider name is unknown.
    """
    match config.provider:
        case "openai":
            return OpenAIModerationProvider(client=client, api_key=config.openai_api_key)
        case "gemini":
            return GeminiModerationProvider(
                client=client, api_key=config.gemini_api_key, model=config.gemini_model
            )
        case "local":
            return LocalModerationProvider(blocklist=config.blocklist_words)
        case _:
            raise ConfigurationError(
                f"Unknown AI provider: {config.provider!r} (expected one of {', '.join(PROVIDER_NAMES)})"
            )


async def moderate_content(
    text: str, config: Config, client: httpx.AsyncClient
) -> ModerationResult:
    """Moderate text with the configured provider and sensitivity."""
    provider = build_provider(config, client)
    return await provider.moderate(text, config.sensitivity)
