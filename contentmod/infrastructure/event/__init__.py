from contentmod.infrastructure.event.di import EventProvider

__all__ = ["EventProvider"]
