from contentmod.domain.moderation.util.di.provider import ModerationDomainProvider

__all__ = ["ModerationDomainProvider"]
