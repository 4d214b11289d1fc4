"""Runs the external programs notebook relies on: the editor, the pager, and the search utility.

Programs are always started from an argument list, never through a shell, so paths and search terms containing
quotes or other shell metacharacters are passed through unchanged.
"""

import logging
import os.path
import shlex
import subprocess
import sys
from typing import List
from notebook_cli.errors import ExternalProgramError
from notebook_cli.models import SearchOutcome


logger = logging.getLogger(__name__)


def _run(args: List[str]) -> int:
    logger.debug('Running %s', args)
    try:
        result = subprocess.run(args)
    except OSError as e:
        raise ExternalProgramError(f'Could not run {args[0]}: {e.strerror or e}', args[0], e) from e
    logger.debug('%s exited with status %s', args[0], result.returncode)
    return result.returncode


def run_interactive(program: str, argument: str) -> int:
    """Runs the program with the given path as its last argument, attached to the current terminal.

    The program string may contain arguments of its own (for example ``code --wait``); it is split using shell
    quoting rules, but no shell is involved. Blocks until the program exits and returns its exit status.

    Raises :exc:`notebook_cli.errors.ExternalProgramError` if the program is blank or cannot be started.
    """
    try:
        args = shlex.split(program)
    except ValueError as e:
        raise ExternalProgramError(f'Invalid program command {program!r}: {e}', program, e) from e
    if not args:
        raise ExternalProgramError('No program configured', program)
    return _run(args + [argument])


def search_command(term: str, path: str, platform: str = None) -> List[str]:
    """Returns the arguments for a recursive, case-insensitive search of path for term.

    ``grep`` is used everywhere except Windows, where ``findstr`` is used.
    """
    platform = platform or sys.platform
    if platform == 'win32':
        target = os.path.join(path, '*') if os.path.isdir(path) else path
        return ['findstr', '/s', '/i', '/p', f'/c:{term}', target]
    return ['grep', '-r', '-i', '--', term, path]


def run_search(term: str, path: str) -> SearchOutcome:
    """Searches path for term, letting the utility print its results directly to the terminal.

    Both ``grep`` and ``findstr`` exit with status 1 when nothing matched, which is reported as
    :attr:`SearchOutcome.NO_MATCHES` rather than as a failure.
    """
    status = _run(search_command(term, path))
    if status == 0:
        return SearchOutcome.MATCHES
    if status == 1:
        return SearchOutcome.NO_MATCHES
    return SearchOutcome.FAILED
