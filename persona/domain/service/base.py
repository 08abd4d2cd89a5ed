"""Base class for domain services."""


class Service:
    """Marker base for domain services.

    Services own the rules that span repositories: validating vote input
    against the catalog, and changing a vote record together with the
    tally of the comment it belongs to.
    """
