"""Errors raised while bootstrapping a Sword application."""

from __future__ import annotations


class SwordError(Exception):
    """Base class for every fatal bootstrap failure."""


class ConfigError(SwordError):
    """Raised when configuration cannot be loaded from the environment."""

    def __init__(self, variable: str, message: str) -> None:
        super().__init__(message)
        self.variable = variable


class MissingRequiredVariable(ConfigError):
    def __init__(self, variable: str) -> None:
        super().__init__(variable, f"{variable} must be set")


class InvalidNumericValue(ConfigError):
    def __init__(self, variable: str, value: object) -> None:
        super().__init__(
            variable, f"{variable} must be an unsigned integer in range, got {value!r}"
        )
        self.value = value


class DatabaseConnectError(SwordError):
    """Raised when the connection pool cannot be established."""


class MigrationError(SwordError):
    """Raised when a schema migration fails.

    Migrations applied before the failing one stay committed.
    """

    def __init__(self, revision: str | None, message: str) -> None:
        super().__init__(message)
        self.revision = revision


class BindError(SwordError):
    """Raised when the HTTP listener cannot bind its address."""

    def __init__(self, address: str, reason: str) -> None:
        super().__init__(f"Failed to bind {address}: {reason}")
        self.address = address
        self.reason = reason
