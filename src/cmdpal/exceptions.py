"""Exception hierarchy for the command palette engine.

Everything raised on purpose derives from CmdpalError so the CLI can
turn it into a one-line message and a non-zero exit code.
"""

from __future__ import annotations


class CmdpalError(Exception):
    """Base class for all cmdpal errors."""


class InvalidCommandError(CmdpalError, ValueError):
    """A Command was built without a usable id or label."""


class CatalogError(CmdpalError):
    """A command catalog file could not be read or failed validation."""

    def __init__(self, message: str, path: str | None = None) -> None:
        self.path = path
        if path:
            message = f"{path}: {message}"
        super().__init__(message)


class ConfigError(CmdpalError):
    """The palette configuration file is malformed or holds invalid values."""
