"""Error hierarchy for contentmod.

Error layers:
- ModerationError: Base class for all contentmod errors
- DomainError: Input that cannot be moderated (recorded, never fatal)
- InfrastructureError: Configuration, backend and event bus failures

The real-time path records ConfigurationError and ProviderError into the
record's moderation metadata before re-raising them. The backfill path logs
them and moves on to the next record.
"""


class ModerationError(Exception):
    """Base class for all contentmod errors."""

    def __init__(self, message: str, code: str | None = None) -> None:
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(message)


# =============================================================================
# Domain Errors
# =============================================================================


class DomainError(ModerationError):
    """Base class for domain errors."""


class ValidationError(DomainError):
    """Record content cannot be moderated (missing or non-text field)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message, code="VALIDATION_ERROR")
        self.field = field


class NotFoundError(DomainError):
    """Record does not exist."""


# =============================================================================
# Infrastructure Errors
# =============================================================================


class InfrastructureError(ModerationError):
    """Base class for infrastructure/system errors."""


class ConfigurationError(InfrastructureError):
    """System misconfiguration detected (unknown provider, missing credential)."""


class ProviderError(InfrastructureError):
    """A scoring backend failed or returned something unusable."""

    def __init__(self, message: str, provider: str, code: str | None = None) -> None:
        super().__init__(message, code=code)
        self.provider = provider


class EventPublishError(InfrastructureError):
    """Publishing a moderation event to the event channel failed."""
