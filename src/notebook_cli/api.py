"""Provides the main entry point for using the library, :class:`Notebook`"""

from __future__ import annotations
from contextlib import contextmanager
from datetime import datetime, timezone
import logging
import os
import os.path
from typing import Callable, Iterator, List, Optional, Set
import shortuuid
from notebook_cli.conf import NotebookConf, config_path, notes_root_path
from notebook_cli.errors import ConfigurationError, FileSystemError, MissingArgumentError, NotFoundError, PathError
from notebook_cli.models import DeleteFileCmd, DeleteFolderCmd, DeletionPlan, FileEditCmd, SearchOutcome, TreeEntry
from notebook_cli.paths import NotesRoot
from notebook_cli import programs


logger = logging.getLogger(__name__)


@contextmanager
def _fs_errors(path: str):
    try:
        yield
    except OSError as e:
        raise FileSystemError(f'{e.strerror or e}: {path}', path, e) from e


def note_filename(now: datetime = None) -> str:
    """Returns the filename for a note created at the given time (by default, the current time).

    The name is built from the UTC timestamp in ISO 8601 format, to the millisecond, with the ``:`` and ``.``
    characters removed, e.g. ``note_2012-05-02T030405000Z.txt``
    """
    now = now or datetime.now(timezone.utc)
    stamp = now.astimezone(timezone.utc).strftime('%Y-%m-%dT%H%M%S') + f'{now.microsecond // 1000:03d}Z'
    return f'note_{stamp}.txt'


def find_available_name(dest: str, unavailable: Set[str] = frozenset()) -> str:
    """Returns dest, or a variation of it with a short UUID appended if that path is already taken.

    A path is taken if it exists or is in unavailable. For example, ``/notes/note.txt`` might become
    ``/notes/note_WQ5UFHUTqfTd6HBYN4dAW6.txt``
    """
    while os.path.lexists(dest) or dest in unavailable:
        dirname, basename = os.path.split(dest)
        name, suffix = os.path.splitext(basename)
        dest = os.path.join(dirname, f'{name}_{shortuuid.uuid()}{suffix}')
    return dest


class Notebook:
    """Main entry point for working programmatically with your notes.

    Generally, you should get an instance using the :meth:`Notebook.for_user` method.

    All paths accepted by the methods of this class are relative to the notes root, and are checked by
    :meth:`notebook_cli.paths.NotesRoot.resolve`, so nothing outside the root can be read or changed. Methods
    raise :exc:`notebook_cli.errors.NotFoundError` when the note or folder they are asked about does not exist,
    and wrap other I/O failures in :exc:`notebook_cli.errors.FileSystemError`.

    .. attribute:: conf
       :type: notebook_cli.conf.NotebookConf

    .. attribute:: root
       :type: notebook_cli.paths.NotesRoot

    .. attribute:: conf_path
       :type: str

       The configuration file opened by :meth:`edit_config`.

    Here's an example that prints every note in the ``work`` folder:

    .. code-block:: python

       from notebook_cli.api import Notebook
       nb = Notebook.for_user()
       for entry in nb.tree('work'):
           if not entry.is_dir:
               print(entry.path)
    """

    @staticmethod
    def for_user() -> Notebook:
        """Creates an instance using the user's ``~/.notebook.yaml`` file and ``~/.notes`` directory.

        Both are created if they do not exist yet. Raises :exc:`notebook_cli.errors.ConfigurationError` if the
        configuration file exists but cannot be decoded.
        """
        conf = NotebookConf.for_user()
        root = notes_root_path()
        with _fs_errors(root):
            os.makedirs(root, exist_ok=True)
        return Notebook(conf, root)

    def __init__(self, conf: NotebookConf, root: str, conf_path: str = None):
        self.conf = conf
        self.root = NotesRoot(root)
        self.conf_path = conf_path or config_path()

    def _note(self, path: str) -> str:
        resolved = self.root.resolve(path)
        if not os.path.isfile(resolved):
            raise NotFoundError(path, 'Note')
        return resolved

    def new(self, folder: str = '') -> Optional[str]:
        """Creates a note in the given folder by opening a new, timestamp-named file in the editor.

        The folder, and any missing parents, are created first. If the editor leaves the file empty (or never
        saves it), the file is deleted and None is returned; otherwise the absolute path of the note is returned.
        """
        dirpath = self.root.resolve(folder)
        with _fs_errors(dirpath):
            os.makedirs(dirpath, exist_ok=True)
        path = find_available_name(os.path.join(dirpath, note_filename()))
        programs.run_interactive(self.conf.editor, path)
        with _fs_errors(path):
            if os.path.isfile(path) and os.path.getsize(path) > 0:
                logger.debug('Saved new note %s', path)
                return path
            if os.path.lexists(path):
                os.remove(path)
        logger.debug('Discarded empty note %s', path)
        return None

    def tree(self, path: str = '') -> Iterator[TreeEntry]:
        """Returns the files and folders under path, depth-first.

        Within each folder, the most recently modified entries come first. Each folder is followed immediately
        by its own contents. Symlinks are listed but not followed.

        Raises :exc:`notebook_cli.errors.NotFoundError` right away (not on iteration) if path does not exist.
        """
        top = self.root.resolve(path)
        if not os.path.exists(top):
            raise NotFoundError(path)
        if not os.path.isdir(top):
            return iter([TreeEntry(self.root.relativize(top), 0)])
        return self._walk(top, 0)

    def _walk(self, dirpath: str, depth: int) -> Iterator[TreeEntry]:
        with _fs_errors(dirpath):
            with os.scandir(dirpath) as it:
                entries = sorted(it, key=lambda e: e.name)
            entries.sort(key=lambda e: e.stat(follow_symlinks=False).st_mtime, reverse=True)
        for entry in entries:
            is_dir = entry.is_dir(follow_symlinks=False)
            yield TreeEntry(self.root.relativize(entry.path), depth, is_dir)
            if is_dir:
                yield from self._walk(entry.path, depth + 1)

    def view(self, path: str) -> None:
        """Opens an existing note in the configured pager."""
        programs.run_interactive(self.conf.pager, self._note(path))

    def edit(self, path: str) -> None:
        """Opens an existing note in the configured editor. Unlike :meth:`new`, an emptied note is kept."""
        programs.run_interactive(self.conf.editor, self._note(path))

    def search(self, term: str, path: str = '', on_start: Callable[[str], None] = None) -> SearchOutcome:
        """Searches the notes under path (or all notes) for term, ignoring case.

        Results are printed by the search utility itself as it runs. If given, on_start is called with the
        resolved search path just before the utility is started.

        Raises :exc:`notebook_cli.errors.MissingArgumentError` without starting anything if term is empty.
        """
        if not term:
            raise MissingArgumentError('Please provide a search term.')
        target = self.root.resolve(path)
        if not os.path.exists(target):
            raise NotFoundError(path)
        if on_start:
            on_start(target)
        return programs.run_search(term, target)

    def delete(self, path: str) -> None:
        """Deletes a note immediately. There is no confirmation and no undo.

        If path is a symlink, the link is deleted, not what it points to.
        """
        located = self.root.locate(path)
        if not (os.path.islink(located) or os.path.isfile(located)):
            raise NotFoundError(path, 'Note')
        self.change([DeleteFileCmd(located)])

    def mkdir(self, path: str) -> bool:
        """Creates a folder and any missing parents. Returns False, changing nothing, if it already exists.

        Raises :exc:`notebook_cli.errors.FileSystemError` if something other than a folder is in the way.
        """
        resolved = self.root.resolve(path)
        if os.path.isdir(resolved):
            return False
        if os.path.exists(resolved):
            raise FileSystemError(f'Not a folder: {path}', resolved)
        with _fs_errors(resolved):
            os.makedirs(resolved)
        return True

    def rmdir_plan(self, path: str) -> DeletionPlan:
        """Lists everything that deleting the folder at path would remove, without removing anything.

        If path is a symlink to a folder, only the link is removed.
        Raises :exc:`notebook_cli.errors.PathError` if path refers to the notes root itself.
        """
        target = self.root.locate(path)
        if target == self.root.path:
            raise PathError('Refusing to delete the notes directory itself', path)
        if not os.path.isdir(target):
            raise NotFoundError(path, 'Folder')
        if os.path.islink(target):
            return DeletionPlan(target, [DeleteFileCmd(target)])
        files = []
        folders = []
        self._scan(target, files, folders)
        folders.append(target)
        # a folder's descendants always have longer paths than the folder itself
        folders.sort(key=len, reverse=True)
        edits = [DeleteFileCmd(f) for f in files] + [DeleteFolderCmd(f) for f in folders]
        return DeletionPlan(target, edits)

    def _scan(self, dirpath: str, files: List[str], folders: List[str]) -> None:
        with _fs_errors(dirpath):
            with os.scandir(dirpath) as it:
                entries = sorted(it, key=lambda e: e.name)
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                folders.append(entry.path)
                self._scan(entry.path, files, folders)
            else:
                files.append(entry.path)

    def change(self, edits: List[FileEditCmd]) -> None:
        """Applies the given edits in order. Every path must be inside the notes root."""
        for edit in edits:
            if not self.root.contains(edit.path):
                raise PathError(f'Path is outside the notes directory: {edit.path}', edit.path)
        for edit in edits:
            logger.debug('Applying %s', edit)
            with _fs_errors(edit.path):
                if isinstance(edit, DeleteFileCmd):
                    os.remove(edit.path)
                elif isinstance(edit, DeleteFolderCmd):
                    os.rmdir(edit.path)
                else:
                    raise ValueError(f'Unsupported edit: {edit}')

    def edit_config(self) -> Optional[ConfigurationError]:
        """Opens the configuration file in the editor, then checks that it can still be loaded.

        The running instance keeps its current settings. Returns the error the next run would hit, if any.
        """
        programs.run_interactive(self.conf.editor, self.conf_path)
        try:
            NotebookConf.load(self.conf_path)
        except ConfigurationError as e:
            return e
        return None
