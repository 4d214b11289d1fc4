"""Defines classes for describing the notes tree and changes to it.

The most important classes are :class:`TreeEntry` and :class:`FileEditCmd`.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List


@dataclass
class TreeEntry:
    """One file or folder encountered while listing the notes tree."""

    path: str
    """Path relative to the notes root."""

    depth: int
    """0 for direct children of the listed folder, 1 for their children, and so on."""

    is_dir: bool = False

    def display(self) -> str:
        """Returns the line shown by the ``list`` command: indentation, path, and a trailing ``/`` for folders."""
        suffix = '/' if self.is_dir else ''
        return f'{"  " * self.depth}{self.path}{suffix}'


@dataclass
class FileEditCmd:
    """Base class for requests to make changes to the notes tree."""

    path: str
    """Absolute path to the file or folder that should be changed."""


@dataclass
class DeleteFileCmd(FileEditCmd):
    """Represents a request to delete a single file."""


@dataclass
class DeleteFolderCmd(FileEditCmd):
    """Represents a request to delete a folder, which must already be empty when the request is applied."""


@dataclass
class DeletionPlan:
    """The result of previewing a recursive folder deletion.

    Nothing is deleted when a plan is made; pass :attr:`edits` to :meth:`notebook_cli.api.Notebook.change` to
    carry it out. All :class:`DeleteFileCmd` instances come first, followed by :class:`DeleteFolderCmd` instances
    ordered so that nested folders come before their ancestors.
    """

    target: str
    """Absolute path of the folder being deleted."""

    edits: List[FileEditCmd] = field(default_factory=list)

    @property
    def files(self) -> List[str]:
        return [e.path for e in self.edits if isinstance(e, DeleteFileCmd)]

    @property
    def folders(self) -> List[str]:
        return [e.path for e in self.edits if isinstance(e, DeleteFolderCmd)]


class SearchOutcome(Enum):
    MATCHES = 'matches'
    NO_MATCHES = 'no-matches'
    FAILED = 'failed'
