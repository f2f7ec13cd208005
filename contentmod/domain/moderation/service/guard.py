"""Idempotency guard for moderation processing."""

from collections.abc import Mapping
from typing import Any

from contentmod.domain.moderation.model.value import MODERATION_VERSION


def should_skip(metadata: Any, version: str = MODERATION_VERSION) -> bool:
    """Return True if a record was already processed by this moderation version.

    Creation events can be redelivered and backfill scans revisit records, so
    both paths consult the stored metadata first. Metadata written by an older
    version counts as unprocessed, which is how a logic change gets rolled out
    to existing records.

    Args:
        metadata: Raw value stored under the moderation field (may be None).
        version: Current moderation version.
    """
    if not isinstance(metadata, Mapping):
        return False
    return metadata.get("processed") is True and metadata.get("version") == version
