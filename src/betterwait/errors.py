# errors.py
from __future__ import annotations


class ConfigError(Exception):
    """Raised when a wait configuration is invalid. Fatal: nothing is polled."""
    pass


class APIError(Exception):
    """Raised when GitHub API requests fail."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status
