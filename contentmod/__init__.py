"""contentmod - asynchronous text moderation for document stores."""

__version__ = "0.1.0"
