"""Exceptions raised by the sshdeck config store."""

from typing import List, Optional


class SSHDeckError(Exception):
    """Base class for all sshdeck failures."""


class HostNotFoundError(SSHDeckError, KeyError):
    """Raised when a host name is not present in the config file."""

    def __init__(self, name: str, config_path: Optional[str] = None):
        self.name = name
        self.config_path = config_path
        super().__init__(name)

    def __str__(self):
        if self.config_path:
            return f"host '{self.name}' not found in {self.config_path}"
        return f"host '{self.name}' not found"


class HostExistsError(SSHDeckError, ValueError):
    """Raised when adding or renaming onto a name that is already taken."""

    def __init__(self, name: str, config_path: Optional[str] = None):
        self.name = name
        self.config_path = config_path
        super().__init__(f"host '{name}' already exists")


class ValidationError(SSHDeckError, ValueError):
    """Raised when an entry fails field validation."""

    def __init__(self, results: List):
        self.results = list(results)
        messages = "; ".join(f"{r.field}: {r.message}" for r in self.results)
        super().__init__(messages or "invalid host entry")


__all__ = ["SSHDeckError", "HostNotFoundError", "HostExistsError", "ValidationError"]
