"""Exceptions raised by mkproject.

Everything derived from ``MkprojectError`` is fatal for the current invocation:
the CLI reports the message and exits with status 1. Recoverable conditions
(a patch that does not apply, a file that cannot be rendered) are never raised
past their stage; they are reported as warnings instead.
"""

from __future__ import annotations

from typing import List, Optional


class MkprojectError(Exception):
    """Base class for fatal mkproject errors."""


class CommandError(MkprojectError):
    """Raised when an external command fails or cannot be started."""

    def __init__(
        self, command: List[str], returncode: Optional[int], output: str = ""
    ) -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        if returncode is None:
            message = f"Could not run command: {' '.join(command)}"
        else:
            message = (
                f"Command failed with exit code {returncode}: {' '.join(command)}"
            )
        super().__init__(message)


class FetchError(MkprojectError):
    """Raised when a template source cannot be retrieved."""


class TemplateConfigError(MkprojectError):
    """Raised when the template condition table is malformed."""


class SourceResolutionError(MkprojectError):
    """Raised when no source location can be chosen for a template."""


class MissingTemplateFileError(MkprojectError):
    """Raised when a file the template guarantees is absent."""


class InvalidParametersError(MkprojectError):
    """Raised when collected template parameters fail validation."""


class TemplateNotFoundError(MkprojectError):
    """Raised when an unknown template id is requested."""
