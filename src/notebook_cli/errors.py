"""Exceptions raised by notebook operations.

Everything derives from :exc:`Error`, so callers that only care whether an operation worked can catch that.
:exc:`NotFoundError` and :exc:`MissingArgumentError` describe mistakes in what the user typed; the command-line
interface reports them as ordinary messages. The rest indicate the operation could not be carried out.
"""

from typing import Optional


class Error(Exception):
    pass


class NotFoundError(Error):
    """Raised when a note, folder, or search path does not exist."""
    def __init__(self, path: str, kind: str = 'Path'):
        super().__init__(f'{kind} not found: {path}')
        self.path = path
        self.kind = kind


class MissingArgumentError(Error):
    """Raised when a required argument, such as a search term, is empty."""


class PathError(Error):
    """Raised when a path cannot be used, generally because it points outside the notes root."""
    def __init__(self, message: str, path: str):
        super().__init__(message)
        self.path = path


class ConfigurationError(Error):
    """Raised when the configuration file exists but cannot be read or decoded."""
    def __init__(self, message: str, path: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.path = path
        self.cause = cause


class FileSystemError(Error):
    """Wraps an unexpected :exc:`OSError`, such as a permission problem."""
    def __init__(self, message: str, path: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.path = path
        self.cause = cause


class ExternalProgramError(Error):
    """Raised when the editor, pager, or search utility cannot be started."""
    def __init__(self, message: str, program: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.program = program
        self.cause = cause
