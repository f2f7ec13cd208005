"""Moderation value objects: results, persisted metadata and action outcomes."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import ConfigDict, Field

from contentmod.domain.shared.model.value import ValueObject

# Bumping this makes every stored metadata entry eligible for reprocessing.
MODERATION_VERSION = "0.1.0"


class ModerationStatus(StrEnum):
    FLAGGED = "flagged"
    APPROVED = "approved"
    SKIPPED = "skipped"
    ERROR = "error"


class ModerationAction(StrEnum):
    """Configured policy applied to moderated records."""

    FLAG = "flag"
    HIDE = "hide"
    DELETE = "delete"


class OutcomeKind(StrEnum):
    """What the action engine actually did to a record."""

    DELETED = "deleted"
    APPROVED = "approved"
    HIDDEN = "hidden"
    FLAGGED = "flagged"


class ModerationResult(ValueObject):
    """Normalized output every scoring backend returns."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    flagged: bool
    score: float = Field(ge=0.0, le=1.0)
    categories: dict[str, bool] = Field(default_factory=dict)
    category_scores: dict[str, float] = Field(default_factory=dict, alias="categoryScores")
    provider: str
    reason: str = ""

    def to_payload(self) -> dict[str, Any]:
        """Wire shape used in events (camelCase keys)."""
        return self.model_dump(mode="json", by_alias=True)


class ModerationMetadata(ValueObject):
    """Moderation state embedded in a record under the moderation field.

    Only `processed`, `version`, `status` and `timestamp` are always present;
    the remaining fields depend on the status and are omitted when unset.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    processed: bool = True
    version: str = MODERATION_VERSION
    status: ModerationStatus
    flagged: bool | None = None
    score: float | None = None
    provider: str | None = None
    reason: str | None = None
    categories: dict[str, bool] | None = None
    category_scores: dict[str, float] | None = Field(default=None, alias="categoryScores")
    error: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def from_result(cls, result: ModerationResult) -> "ModerationMetadata":
        return cls(
            status=ModerationStatus.FLAGGED if result.flagged else ModerationStatus.APPROVED,
            flagged=result.flagged,
            score=result.score,
            provider=result.provider,
            reason=result.reason,
            categories=dict(result.categories),
            category_scores=dict(result.category_scores),
        )

    @classmethod
    def skipped(cls, reason: str) -> "ModerationMetadata":
        return cls(status=ModerationStatus.SKIPPED, reason=reason)

    @classmethod
    def failed(cls, error: str) -> "ModerationMetadata":
        return cls(status=ModerationStatus.ERROR, error=error)

    def to_document(self) -> dict[str, Any]:
        """Serialize for storage in the record."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ActionOutcome(ValueObject):
    """Result of applying the configured action to one record."""

    action: OutcomeKind


class ModerationRun(ValueObject):
    """What the real-time path did with one record.

    `status` is None when the guard found the record already processed.
    """

    path: str
    status: ModerationStatus | None = None
    result: ModerationResult | None = None
    outcome: ActionOutcome | None = None
