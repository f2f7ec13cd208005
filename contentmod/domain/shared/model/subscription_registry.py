"""SubscriptionRegistry - maps event type names to the handlers consuming them."""


class SubscriptionRegistry(dict[str, set[str]]):
    """Event type name -> set of handler (consumer group) names.

    Built once at startup from the handler list.
    """
