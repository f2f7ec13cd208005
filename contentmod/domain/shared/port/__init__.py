"""Port base class - marks interfaces implemented by infrastructure adapters."""

from typing import Protocol


class Port(Protocol):
    """Marker base for hexagonal ports."""
