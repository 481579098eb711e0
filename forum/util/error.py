"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Invalid or missing configuration."""

    pass


class DependencyInjectionError(UtilError):
    """A DI provider could not be resolved."""

    pass
