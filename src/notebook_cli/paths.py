"""Maps the relative paths users type to locations under the notes root, and back."""

import os.path
from notebook_cli.errors import PathError


class NotesRoot:
    """Resolves user-supplied paths against a single root directory.

    .. attribute:: path
       :type: str

       The canonical (symlink-free, absolute) path of the root.
    """
    def __init__(self, path: str):
        self.path = os.path.realpath(path)

    def contains(self, path: str) -> bool:
        return path == self.path or path.startswith(os.path.join(self.path, ''))

    def resolve(self, relative_path: str = '') -> str:
        """Returns the canonical absolute path for a path relative to the root.

        An empty path refers to the root itself. ``.`` and ``..`` segments and symlinks are resolved first, and
        :exc:`notebook_cli.errors.PathError` is raised if the result falls outside the root. Absolute paths are
        accepted only if they point inside the root.
        """
        resolved = os.path.realpath(os.path.join(self.path, relative_path or ''))
        if not self.contains(resolved):
            raise PathError(f'Path is outside the notes directory: {relative_path}', relative_path)
        return resolved

    def locate(self, relative_path: str = '') -> str:
        """Like :meth:`resolve`, but a symlink in the final component is left as is rather than followed.

        Use this for operations that act on the entry itself, such as deleting it.
        """
        joined = os.path.normpath(os.path.join(self.path, relative_path or ''))
        if joined == self.path:
            return self.path
        parent, name = os.path.split(joined)
        located = os.path.join(os.path.realpath(parent), name)
        if not self.contains(located):
            raise PathError(f'Path is outside the notes directory: {relative_path}', relative_path)
        return located

    def relativize(self, absolute_path: str) -> str:
        """Returns the path relative to the root, for display. The root itself is ``.``"""
        return os.path.relpath(absolute_path, self.path)
