"""Errors raised by check and request loading."""


class CheckError(Exception):
    """Raised when check cannot determine the current versions."""

    pass


class ConfigError(ValueError):
    """Raised when a check request or source configuration is invalid."""

    pass
