"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Settings are inconsistent with the target environment."""

    pass


class DependencyInjectionError(UtilError):
    """A provider component could not be resolved."""

    pass
