"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the comment rules that span several documents:
    the comment itself, its parent comment and the owning content item.
    """

    pass
