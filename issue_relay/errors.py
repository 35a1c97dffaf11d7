"""Error types shared by the relay and its service wrappers."""


class RelayError(Exception):
    """Base class for errors raised by issue-relay."""

    pass


class ConfigurationError(RelayError):
    """Raised when a required setting or credential is missing or invalid."""

    pass


class ValidationError(RelayError, ValueError):
    """Raised when a wrapper is called without its required arguments."""

    pass
