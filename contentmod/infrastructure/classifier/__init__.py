"""Scoring backends implementing the ModerationProvider port."""

from contentmod.infrastructure.classifier.factory import build_provider, moderate_content
from contentmod.infrastructure.classifier.gemini import GeminiModerationProvider
from contentmod.infrastructure.classifier.local import LocalModerationProvider
from contentmod.infrastructure.classifier.openai import OpenAIModerationProvider

__all__ = [
    "GeminiModerationProvider",
    "LocalModerationProvider",
    "OpenAIModerationProvider",
    "build_provider",
    "moderate_content",
]
