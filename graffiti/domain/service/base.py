"""Common ancestor of the domain services."""


class Service:
    """Marker base for stateful domain services.

    Subclasses are wired once per application container; anything that must
    outlive a request (locks, listeners, live subscriptions) lives on them.
    """
