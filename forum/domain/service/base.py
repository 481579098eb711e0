"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Services hold repositories, open a logfire span per operation and
    express forum rules that span more than one entity.
    """

    pass
