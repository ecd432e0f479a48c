"""Errors raised by merkle-allowlist."""


class AllowlistError(Exception):
    """Base class for every error the tool reports to the user."""


class ConfigError(AllowlistError):
    """Missing or unusable configuration."""


class AllowlistFileError(AllowlistError):
    """An allowlist or proof file could not be read or parsed."""


class EnvironmentNotFoundError(AllowlistError):
    """The requested environment is not present in the allowlist file."""

    def __init__(self, environment: str, path=None):
        self.environment = environment
        self.path = path
        where = f" in {path}" if path else ""
        super().__init__(f"Environment '{environment}' not found{where}")


class InvalidEntryError(AllowlistError):
    """An allowlist entry has a blank identifier or a bad address."""


class ChainError(AllowlistError):
    """An RPC call against the chain failed."""
