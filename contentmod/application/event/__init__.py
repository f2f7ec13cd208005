"""Application-level lifecycle events."""

from contentmod.application.event.extension_installed import ExtensionInstalled

__all__ = ["ExtensionInstalled"]
