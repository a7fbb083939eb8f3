"""Errors raised by coordinators."""


class CoordinatorError(Exception):
    """Base class for coordinator failures."""


class InvalidArgumentError(CoordinatorError, ValueError):
    """Malformed resource id, service name, status or event kind."""


class BackendUnavailableError(CoordinatorError):
    """The status store or transport could not be reached or confirmed."""
