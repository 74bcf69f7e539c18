"""Exception hierarchy for ngui-migrate.

Recoverable failures are caught by the runner and recorded in result
objects; the rest propagate to the CLI.
"""

from typing import Optional


class MigrationToolError(Exception):
    """Base class for every error raised by ngui-migrate."""


class ParseError(MigrationToolError):
    """A source file could not be read or parsed."""

    def __init__(self, file_path: str, message: str, line: int = 0):
        self.file_path = file_path
        self.line = line
        self.message = message
        super().__init__(f"{file_path}:{line}: {message}")


class TransformationMismatchError(MigrationToolError):
    """A transformation's old text was not found on its target line."""

    def __init__(self, file_path: str, line: int, old_text: str):
        self.file_path = file_path
        self.line = line
        self.old_text = old_text
        super().__init__(f"{file_path}:{line}: expected text not found: {old_text!r}")


class FileIOError(MigrationToolError):
    """Reading or writing a project file failed."""

    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message
        super().__init__(f"{path}: {message}")


class BackupMissingError(MigrationToolError):
    """Rollback was requested but no usable backup exists."""


class ExternalProcessError(MigrationToolError):
    """An external compiler or build command failed to run or exited non-zero."""

    def __init__(self, command: str, message: str, returncode: Optional[int] = None, output: str = ""):
        self.command = command
        self.returncode = returncode
        self.output = output
        super().__init__(f"{command}: {message}")


class ProjectNotFoundError(MigrationToolError):
    """The project root does not exist or is not a directory."""


class ConfigError(MigrationToolError):
    """The ngui-migrate config file is malformed."""
