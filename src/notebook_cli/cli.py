"""Command-line interface for notebook."""


import argparse
import logging
import os
import sys
from terminaltables import AsciiTable
from notebook_cli.api import Notebook
from notebook_cli.errors import Error, MissingArgumentError, NotFoundError
from notebook_cli.models import DeletionPlan, SearchOutcome


logger = logging.getLogger(__name__)

COMMANDS = ('new', 'list', 'view', 'search', 'delete', 'edit', 'mkdir', 'rmdir', 'config')


def _require_path(args) -> str:
    if not args.path:
        raise MissingArgumentError('Please provide a path.')
    return args.path


def _new(args, nb: Notebook) -> int:
    path = nb.new(args.path or '')
    if path:
        print(f'Note saved as {path}')
    else:
        print('Note was empty, deleting.')
    return 0


def _list(args, nb: Notebook) -> int:
    entries = nb.tree(args.path or '')
    print(f'Notes in {args.path or "root"}:')
    for entry in entries:
        print(entry.display())
    return 0


def _view(args, nb: Notebook) -> int:
    nb.view(_require_path(args))
    return 0


def _search(args, nb: Notebook) -> int:
    def announce(target):
        print(f"Searching for '{args.term}' in {args.path or 'all notes'}:", flush=True)

    outcome = nb.search(args.term or '', args.path or '', on_start=announce)
    if outcome == SearchOutcome.NO_MATCHES:
        print('No matches found.')
    elif outcome == SearchOutcome.FAILED:
        print('An error occurred during the search.', file=sys.stderr)
        return 1
    return 0


def _delete(args, nb: Notebook) -> int:
    path = _require_path(args)
    nb.delete(path)
    print(f'Note deleted: {path}')
    return 0


def _edit(args, nb: Notebook) -> int:
    path = _require_path(args)
    nb.edit(path)
    print(f'Note updated: {path}')
    return 0


def _mkdir(args, nb: Notebook) -> int:
    path = _require_path(args)
    if nb.mkdir(path):
        print(f'Folder created: {path}')
    else:
        print(f'Folder already exists: {path}')
    return 0


def _print_plan(plan: DeletionPlan, nb: Notebook) -> None:
    data = [('Type', 'Path')]
    data.extend(('File', nb.root.relativize(p)) for p in plan.files)
    data.extend(('Folder', nb.root.relativize(p)) for p in plan.folders)
    print('The following items will be deleted:')
    print(AsciiTable(data).table)


def _confirm(prompt: str) -> bool:
    try:
        answer = input(prompt)
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return answer.strip().lower() == 'y'


def _rmdir(args, nb: Notebook) -> int:
    path = _require_path(args)
    plan = nb.rmdir_plan(path)
    _print_plan(plan, nb)
    if _confirm('Are you sure you want to delete this folder and all its contents? (y/N) '):
        nb.change(plan.edits)
        print(f'Folder deleted: {path}')
    else:
        print('Deletion cancelled.')
    return 0


def _config(args, nb: Notebook) -> int:
    error = nb.edit_config()
    if error:
        print(f'Warning: {error}', file=sys.stderr)
    print('Configuration updated. Please restart the app for changes to take effect.')
    return 0


def argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='notebook',
        description='Create, browse, search and edit plain-text notes stored under ~/.notes.')
    parser.set_defaults(func=None)

    subs = parser.add_subparsers(title='Commands', metavar='<command>')

    p_new = subs.add_parser('new', help='Create a new note, optionally at a specific path.')
    p_new.add_argument('path', nargs='?', help='Folder to create the note in. Missing folders are created.')
    p_new.set_defaults(func=_new)

    p_list = subs.add_parser('list', help='List all notes, optionally from a specific path.')
    p_list.add_argument('path', nargs='?', help='Folder to list. Defaults to all notes.')
    p_list.set_defaults(func=_list)

    p_view = subs.add_parser('view', help='View a specific note.')
    p_view.add_argument('path', nargs='?')
    p_view.set_defaults(func=_view)

    p_search = subs.add_parser('search', help='Search notes for a term, optionally in a specific path.')
    p_search.add_argument('term', nargs='?', help='Text to look for, ignoring case.')
    p_search.add_argument('path', nargs='?', help='Folder or note to search. Defaults to all notes.')
    p_search.set_defaults(func=_search)

    p_delete = subs.add_parser('delete', help='Delete a specific note.')
    p_delete.add_argument('path', nargs='?')
    p_delete.set_defaults(func=_delete)

    p_edit = subs.add_parser('edit', help='Edit an existing note.')
    p_edit.add_argument('path', nargs='?')
    p_edit.set_defaults(func=_edit)

    p_mkdir = subs.add_parser('mkdir', help='Create a new folder.')
    p_mkdir.add_argument('path', nargs='?')
    p_mkdir.set_defaults(func=_mkdir)

    p_rmdir = subs.add_parser('rmdir', help='Delete a folder and its contents, after confirmation.')
    p_rmdir.add_argument('path', nargs='?')
    p_rmdir.set_defaults(func=_rmdir)

    p_config = subs.add_parser('config', help='Edit the configuration file (~/.notebook.yaml).')
    p_config.set_defaults(func=_config)

    return parser


def _setup_logging() -> None:
    level = os.environ.get('NOTEBOOK_LOG_LEVEL', 'WARNING').upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), stream=sys.stderr,
                        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s')


def main(args=None) -> int:
    """Runs the tool and returns its exit code.

    args may be an array of string command-line arguments; if absent,
    the process's arguments are used.
    """
    _setup_logging()
    parser = argparser()
    args = sys.argv[1:] if args is None else list(args)
    if not args or args[0] not in COMMANDS:
        parser.print_help()
        return 0
    # everything after the command is positional, even if it starts with "-"
    args, extras = parser.parse_known_args([args[0], '--'] + args[1:])
    if extras:
        logger.debug('Ignoring extra arguments: %s', extras)
    try:
        nb = Notebook.for_user()
        return args.func(args, nb)
    except (NotFoundError, MissingArgumentError) as e:
        print(e)
        return 0
    except Error as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
