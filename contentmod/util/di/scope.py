"""Custom Dishka scopes for contentmod."""

from dishka import BaseScope, new_scope


class Scope(BaseScope):  # type: ignore[misc]  # BaseScope is designed to be subclassed
    """Dependency injection scopes.

    Hierarchy: APP -> UOW

    - APP: Application lifetime (config, HTTP client, engine, event queue)
    - UOW: Unit of Work (one event delivery or one CLI operation, one DB session)
    """

    APP = new_scope("APP")
    UOW = new_scope("UOW")
