"""Error taxonomy for the cleaning engine and its shells."""
from __future__ import annotations


class CleanerError(ValueError):
    """Base class for errors that abort a cleaning run."""


class EmptyInputError(CleanerError):
    def __init__(self, message: str = "CSV file is empty") -> None:
        super().__init__(message)


class NoHeadersError(CleanerError):
    def __init__(self, message: str = "CSV file has no headers") -> None:
        super().__init__(message)


class ConfigError(CleanerError):
    """Raised when a setting read from the environment is invalid."""
